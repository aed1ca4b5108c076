"""Tests for CSV export of conflict decisions."""

import csv
from io import StringIO

from negativeguard.models.keyword import NegativeKeywordLevel
from negativeguard.models.metrics import ConflictAction, ConflictDecision
from negativeguard.reports.csv_export import HEADERS, export_decisions_csv


def _rows(text):
    return list(csv.reader(StringIO(text)))


class TestExportDecisionsCsv:
    """Test CSV formatting of decisions."""

    def test_header_only_when_empty(self):
        """Test an empty run still produces the header row."""
        assert _rows(export_decisions_csv([])) == [HEADERS]

    def test_shared_list_row_shows_blocked_keyword_scope(self):
        """Test Campaign and Ad Group columns come from the blocked keyword."""
        decision = ConflictDecision(
            level=NegativeKeywordLevel.SHARED_SET,
            negative_text="mini",
            negative_match_type="BROAD",
            shared_set_name="Global Negatives",
            positive_text="mini pump",
            positive_match_type="PHRASE",
            positive_campaign_name="Pumps",
            positive_ad_group_name="Mini Pumps",
            action=ConflictAction.REMOVED,
        )

        header, row = _rows(export_decisions_csv([decision]))

        assert dict(zip(header, row)) == {
            "Level": "SHARED_SET",
            "Campaign": "Pumps",
            "Ad Group": "Mini Pumps",
            "Shared List": "Global Negatives",
            "Negative Keyword": "mini",
            "Negative Match Type": "BROAD",
            "Blocked Keyword": "mini pump",
            "Blocked Match Type": "PHRASE",
            "Action": "REMOVED",
        }

    def test_values_with_commas_are_quoted(self):
        """Test every field is quoted so names with commas survive."""
        decision = ConflictDecision(
            level=NegativeKeywordLevel.CAMPAIGN,
            negative_text="free",
            negative_match_type="EXACT",
            positive_text="free",
            positive_match_type="EXACT",
            positive_campaign_name="Brand, US",
            action=ConflictAction.FLAGGED,
        )

        output = export_decisions_csv([decision])

        assert '"Brand, US"' in output
        assert _rows(output)[1][1] == "Brand, US"
