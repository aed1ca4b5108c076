"""Analyzers module for NegativeGuard.

Conflict predicates, the positive keyword index, the per-scope resolvers and
the regression suite that gates every audit run.
"""

from negativeguard.analyzers.base import BaseScopeResolver
from negativeguard.analyzers.conflict_predicate import (
    has_keyword_conflict,
    has_legacy_conflict,
)
from negativeguard.analyzers.keyword_index import PositiveKeywordIndex
from negativeguard.analyzers.scope_resolvers import (
    AdGroupScopeResolver,
    CampaignScopeResolver,
    SharedListScopeResolver,
)
from negativeguard.analyzers.validation import VALIDATION_CASES, run_validation_suite

__all__ = [
    "AdGroupScopeResolver",
    "BaseScopeResolver",
    "CampaignScopeResolver",
    "PositiveKeywordIndex",
    "SharedListScopeResolver",
    "VALIDATION_CASES",
    "has_keyword_conflict",
    "has_legacy_conflict",
    "run_validation_suite",
]
