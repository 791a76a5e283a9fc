from __future__ import annotations

from core.domain.codes import WarningCode
from core.services.duplicates import build_record_index, check_for_duplicates
from core.services.parser import parse_content

PREVIOUS = """\
google.com, pub-1, DIRECT
appnexus.com, 1234, RESELLER
bad line
"""


class TestCheckForDuplicates:
    def test_flags_records_already_published(self):
        entries = parse_content("Google.com, pub-1, DIRECT\nopenx.com, 99, DIRECT\n")

        result = check_for_duplicates("example.com", entries, parse_content(PREVIOUS))

        duplicate, fresh = result
        assert duplicate.has_warning
        assert duplicate.is_valid
        assert duplicate.warning_code is WarningCode.DUPLICATE
        assert duplicate.warning_params == {"domain": "example.com"}
        assert duplicate.duplicate_domain == "example.com"
        assert [w.code for w in duplicate.all_warnings] == [WarningCode.DUPLICATE]
        assert not fresh.has_warning

    def test_account_id_and_relationship_are_part_of_the_key(self):
        entries = parse_content("google.com, PUB-1, DIRECT\ngoogle.com, pub-1, RESELLER\n")

        result = check_for_duplicates("example.com", entries, parse_content(PREVIOUS))

        assert not any(entry.has_warning for entry in result)

    def test_invalid_entries_never_match(self):
        index = build_record_index(parse_content(PREVIOUS))

        assert len(index) == 2

    def test_no_previous_document(self):
        entries = parse_content("google.com, pub-1, DIRECT\n")

        result = check_for_duplicates("example.com", entries, [])

        assert result == entries
        assert result is not entries

    def test_duplicate_removed_when_no_longer_published(self):
        entries = parse_content("google.com, pub-1, DIRECT\n")
        flagged = check_for_duplicates("example.com", entries, parse_content(PREVIOUS))

        result = check_for_duplicates("example.com", flagged, parse_content("openx.com, 1, DIRECT\n"))

        record = result[0]
        assert record.warning_code is None
        assert record.duplicate_domain is None
        assert WarningCode.DUPLICATE not in [w.code for w in record.all_warnings]
