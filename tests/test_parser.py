from __future__ import annotations

import pytest

from core.domain.codes import ErrorCode, Relationship, VariableType
from core.domain.models import GENERATED_LINE_NUMBER, AdsTxtRecord, AdsTxtVariable, is_record, is_variable
from core.services import parse_content, parse_line


class TestParseLine:
    def test_blank_and_comment_lines_are_skipped(self):
        assert parse_line("", 1) is None
        assert parse_line("   ", 2) is None
        assert parse_line("# just a comment", 3) is None

    def test_direct_record(self):
        entry = parse_line("google.com, pub-1234, DIRECT, f08c47fec0942fa0", 1)

        assert isinstance(entry, AdsTxtRecord)
        assert entry.is_valid
        assert entry.domain == "google.com"
        assert entry.account_id == "pub-1234"
        assert entry.relationship is Relationship.DIRECT
        assert entry.certification_authority_id == "f08c47fec0942fa0"
        assert entry.line_number == 1

    def test_relationship_is_case_insensitive(self):
        entry = parse_line("google.com, pub-1234, reseller", 4)

        assert entry.is_valid
        assert entry.relationship is Relationship.RESELLER
        assert entry.certification_authority_id is None

    def test_trailing_comment_is_ignored(self):
        entry = parse_line("google.com, pub-1, DIRECT # main account", 1)

        assert entry.is_valid
        assert entry.relationship is Relationship.DIRECT
        assert entry.raw_line == "google.com, pub-1, DIRECT # main account"

    def test_relationship_in_fourth_field(self):
        entry = parse_line("google.com, pub-1, BANNER, RESELLER, abc", 1)

        assert entry.is_valid
        assert entry.account_type == "BANNER"
        assert entry.relationship is Relationship.RESELLER
        assert entry.certification_authority_id == "abc"

    def test_trailing_empty_field(self):
        entry = parse_line("google.com, pub-1, DIRECT,", 1)

        assert entry.is_valid
        assert entry.certification_authority_id is None

    def test_missing_fields(self):
        entry = parse_line("google.com, pub-1", 7)

        assert isinstance(entry, AdsTxtRecord)
        assert not entry.is_valid
        assert entry.error_code is ErrorCode.MISSING_FIELDS
        assert entry.line_number == 7

    def test_misspelled_relationship(self):
        entry = parse_line("google.com, pub-1, DIRECR", 1)

        assert not entry.is_valid
        assert entry.error_code is ErrorCode.MISSPELLED_RELATIONSHIP

    def test_typo_check_uses_fourth_field_when_present(self):
        entry = parse_line("google.com, pub-1, DIRECR, f08c47fec0942fa0", 1)

        assert not entry.is_valid
        assert entry.error_code is ErrorCode.INVALID_RELATIONSHIP

    def test_misspelled_relationship_in_fourth_field(self):
        entry = parse_line("google.com, pub-1, BANNER, RESELER", 1)

        assert entry.error_code is ErrorCode.MISSPELLED_RELATIONSHIP

    def test_invalid_relationship(self):
        entry = parse_line("google.com, pub-1, PARTNER", 1)

        assert not entry.is_valid
        assert entry.error_code is ErrorCode.INVALID_RELATIONSHIP

    @pytest.mark.parametrize(
        "domain",
        [
            "ads.google.com",
            "not a domain",
            "localhost",
            "goo\tgle.com",
            "goo_gle.com",
            "-bad.com",
            "bad-.com",
            "a" * 64 + ".com",
        ],
    )
    def test_invalid_root_domain(self, domain):
        entry = parse_line(f"{domain}, pub-1, DIRECT", 1)

        assert not entry.is_valid
        assert entry.error_code is ErrorCode.INVALID_ROOT_DOMAIN

    def test_multi_label_suffix_is_a_root_domain(self):
        entry = parse_line("example.co.uk, 123, DIRECT", 1)

        assert entry.is_valid

    def test_empty_account_id(self):
        entry = parse_line("google.com, , DIRECT", 1)

        assert not entry.is_valid
        assert entry.error_code is ErrorCode.EMPTY_ACCOUNT_ID

    def test_variable(self):
        entry = parse_line("contact=adops@example.com", 2)

        assert isinstance(entry, AdsTxtVariable)
        assert entry.variable_type is VariableType.CONTACT
        assert entry.value == "adops@example.com"
        assert not entry.is_generated

    def test_variable_inline_comment_needs_whitespace(self):
        url = parse_line("CONTACT=https://example.com/ads#team", 1)
        commented = parse_line("OWNERDOMAIN=example.com # owner", 2)

        assert url.value == "https://example.com/ads#team"
        assert commented.value == "example.com"

    def test_managerdomain_keeps_country_suffix(self):
        entry = parse_line("MANAGERDOMAIN=manager.com,US", 5)

        assert isinstance(entry, AdsTxtVariable)
        assert entry.variable_type is VariableType.MANAGERDOMAIN
        assert entry.value == "manager.com,US"

    def test_label_of_63_characters_is_accepted(self):
        entry = parse_line("a" * 63 + ".com, 1, DIRECT", 1)

        assert entry.is_valid

    def test_variable_without_value_is_invalid(self):
        entry = parse_line("SUBDOMAIN=", 3)

        assert isinstance(entry, AdsTxtRecord)
        assert not entry.is_valid
        assert entry.error_code is ErrorCode.INVALID_FORMAT


class TestParseContent:
    def test_synthesizes_owner_domain(self):
        entries = parse_content("google.com, pub-1, DIRECT\n", "www.example.com")

        assert len(entries) == 2
        owner = entries[-1]
        assert is_variable(owner)
        assert owner.variable_type is VariableType.OWNERDOMAIN
        assert owner.value == "example.com"
        assert owner.line_number == GENERATED_LINE_NUMBER
        assert owner.raw_line == "OWNERDOMAIN=example.com"

    def test_existing_owner_domain_is_kept(self):
        content = "OWNERDOMAIN=publisher.com\ngoogle.com, pub-1, DIRECT\n"

        entries = parse_content(content, "example.com")

        owners = [e for e in entries if is_variable(e) and e.variable_type is VariableType.OWNERDOMAIN]
        assert [o.value for o in owners] == ["publisher.com"]

    def test_line_numbers_count_comments_and_blank_lines(self):
        content = "\ufeff# header\n\ngoogle.com, pub-1, DIRECT\r\nbad line\n"

        entries = parse_content(content)

        assert [e.line_number for e in entries] == [3, 4]
        assert is_record(entries[0]) and entries[0].is_valid
        assert not entries[1].is_valid

    def test_empty_content(self):
        assert parse_content("") == []
        assert parse_content("   \n# only comments\n") == []

    def test_end_to_end_example(self):
        content = (
            "CONTACT=a@b.com\n"
            "google.com, pub-1, DIRECT\n"
            "adnetwork.com, abcd, RESELLER, f08c47fec0942fa0"
        )

        entries = parse_content(content, "pub.example.com")

        records = [e for e in entries if is_record(e)]
        variables = [e for e in entries if is_variable(e)]
        assert [(r.domain, r.account_id, r.relationship, r.certification_authority_id) for r in records] == [
            ("google.com", "pub-1", Relationship.DIRECT, None),
            ("adnetwork.com", "abcd", Relationship.RESELLER, "f08c47fec0942fa0"),
        ]
        assert all(r.is_valid for r in records)
        assert [(v.variable_type, v.value) for v in variables] == [
            (VariableType.CONTACT, "a@b.com"),
            (VariableType.OWNERDOMAIN, "example.com"),
        ]
        assert variables[-1].is_generated
