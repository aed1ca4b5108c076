"""Resolvers for ad group, campaign and shared list negative keywords."""

from negativeguard.analyzers.base import BaseScopeResolver
from negativeguard.models.keyword import (
    NegativeKeywordLevel,
    NegativeKeywordRecord,
    PositiveKeywordRecord,
)
from negativeguard.models.metrics import ConflictDecision


class AdGroupScopeResolver(BaseScopeResolver):
    """Ad group negatives only block keywords in the same ad group."""

    level = NegativeKeywordLevel.AD_GROUP

    def run(self) -> list[ConflictDecision]:
        return self.resolve(self.data_provider.list_ad_group_negative_keywords())

    def candidates_for(
        self, negative: NegativeKeywordRecord
    ) -> list[PositiveKeywordRecord]:
        """Positives in the campaigns the negative's list is applied to.

        Looks up the attachments on every call. ``run`` fetches them once per
        list and passes the candidates to ``resolve`` instead.
        """
        return self.index.for_ad_group(negative.campaign_id, negative.ad_group_id)


class CampaignScopeResolver(BaseScopeResolver):
    """Campaign negatives block keywords in any ad group of the campaign."""

    level = NegativeKeywordLevel.CAMPAIGN

    def run(self) -> list[ConflictDecision]:
        return self.resolve(self.data_provider.list_campaign_negative_keywords())

    def candidates_for(
        self, negative: NegativeKeywordRecord
    ) -> list[PositiveKeywordRecord]:
        return self.index.for_campaign(negative.campaign_id)


class SharedListScopeResolver(BaseScopeResolver):
    """Shared list negatives block keywords in the campaigns the list is applied to.

    Attachments are read from the platform for every list on every run. A
    list applied to no campaign is skipped without fetching its keywords.
    """

    level = NegativeKeywordLevel.SHARED_SET

    def run(self) -> list[ConflictDecision]:
        decisions = []
        for shared_list in self.data_provider.list_shared_negative_lists():
            attached = self.data_provider.list_campaigns_attached_to(shared_list.id)
            if not attached:
                self.recorder.shared_list_skipped()
                self.logger.info(
                    f"Shared list '{shared_list.name}' ({shared_list.id}) is not "
                    "applied to any campaign; skipping"
                )
                continue

            self.recorder.shared_list_checked()
            candidates = self.index.for_campaigns(attached)
            self.logger.debug(
                f"Checking shared list '{shared_list.name}' against "
                f"{len(candidates)} keywords in {len(attached)} campaigns"
            )
            decisions.extend(
                self.resolve(
                    self.data_provider.list_shared_list_negative_keywords(
                        shared_list.id
                    ),
                    candidates=candidates,
                )
            )
        return decisions

    def candidates_for(
        self, negative: NegativeKeywordRecord
    ) -> list[PositiveKeywordRecord]:
        """Positives in the campaigns the negative's list is applied to.

        Looks up the attachments on every call. ``run`` fetches them once per
        list and passes the candidates to ``resolve`` instead.
        """
        if not negative.shared_set_id:
            return []
        attached = self.data_provider.list_campaigns_attached_to(negative.shared_set_id)
        return self.index.for_campaigns(attached)
