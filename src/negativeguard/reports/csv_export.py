"""CSV export of conflict decisions for operators."""

import csv
from collections.abc import Iterable
from io import StringIO

from negativeguard.models.metrics import ConflictDecision

HEADERS = [
    "Level",
    "Campaign",
    "Ad Group",
    "Shared List",
    "Negative Keyword",
    "Negative Match Type",
    "Blocked Keyword",
    "Blocked Match Type",
    "Action",
]


def export_decisions_csv(decisions: Iterable[ConflictDecision]) -> str:
    """Format conflict decisions as CSV, one row per conflicting negative.

    Campaign and Ad Group are those of the blocked keyword, so shared list
    rows show where the conflict actually bites.

    Args:
        decisions: Decisions from an audit run

    Returns:
        CSV formatted string with a header row
    """
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    writer.writerow(HEADERS)

    for decision in decisions:
        writer.writerow(
            [
                decision.level,
                decision.positive_campaign_name,
                decision.positive_ad_group_name,
                decision.shared_set_name,
                decision.negative_text,
                decision.negative_match_type,
                decision.positive_text,
                decision.positive_match_type,
                decision.action,
            ]
        )

    return output.getvalue()
