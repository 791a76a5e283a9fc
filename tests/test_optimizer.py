from __future__ import annotations

from core.services import optimize_ads_txt
from core.services.optimizer import DEFAULT_FILE_COMMENT, RECORDS_HEADER

MESSY = """\
# Example publisher ads.txt
openx.com, 2, RESELLER
Google.com, pub-1, DIRECT, f08c47fec0942fa0
contact=ops@example.com
google.com, pub-1, DIRECT, f08c47fec0942fa0
google.com, pub-1, RESELLER
appnexus.com, 99, DIRECT
CONTACT=OPS@example.com
this is not a record
OWNERDOMAIN=example.com
"""


class TestOptimize:
    def test_canonical_layout(self):
        expected = (
            "# Example publisher ads.txt\n"
            "\n"
            "# CONTACT Variables\n"
            "CONTACT=ops@example.com\n"
            "\n"
            "# OWNERDOMAIN Variables\n"
            "OWNERDOMAIN=example.com\n"
            "\n"
            "# Advertising System Records\n"
            "appnexus.com, 99, DIRECT\n"
            "google.com, pub-1, DIRECT, f08c47fec0942fa0\n"
            "google.com, pub-1, RESELLER\n"
            "openx.com, 2, RESELLER\n"
        )

        assert optimize_ads_txt(MESSY) == expected

    def test_idempotent(self):
        once = optimize_ads_txt(MESSY, "example.com")

        assert optimize_ads_txt(once, "example.com") == once

    def test_synthesizes_owner_domain(self):
        result = optimize_ads_txt("google.com, pub-1, DIRECT\n", "www.example.com")

        assert "# OWNERDOMAIN Variables\nOWNERDOMAIN=example.com\n" in result
        assert result.startswith(DEFAULT_FILE_COMMENT + "\n\n")

    def test_records_sorted_by_domain_relationship_and_account(self):
        content = "b.com, 2, DIRECT\nb.com, 1, RESELLER\nb.com, 1, DIRECT\na.com, 9, RESELLER\n"

        lines = optimize_ads_txt(content).splitlines()

        records = lines[lines.index(RECORDS_HEADER) + 1 :]
        assert records == [
            "a.com, 9, RESELLER",
            "b.com, 1, DIRECT",
            "b.com, 2, DIRECT",
            "b.com, 1, RESELLER",
        ]

    def test_empty_input_keeps_headers(self):
        expected = f"{DEFAULT_FILE_COMMENT}\n\n{RECORDS_HEADER}\n"

        assert optimize_ads_txt("") == expected
        assert optimize_ads_txt("garbage\n, ,\n") == expected

    def test_never_raises_on_non_text(self):
        assert optimize_ads_txt(None) == f"{DEFAULT_FILE_COMMENT}\n\n{RECORDS_HEADER}\n"
