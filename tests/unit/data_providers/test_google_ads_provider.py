"""Tests for the Google Ads data provider."""

from datetime import date
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from negativeguard.core.config import DateRange
from negativeguard.data_providers.google_ads import GoogleAdsDataProvider
from negativeguard.models.keyword import NegativeKeywordLevel


def _match_type(name):
    return SimpleNamespace(name=name)


def _keyword_row(criterion_id, text, match_type, campaign=(1, "Pumps"), ad_group=(11, "Vacuum")):
    return SimpleNamespace(
        campaign=SimpleNamespace(id=campaign[0], name=campaign[1]),
        ad_group=SimpleNamespace(id=ad_group[0], name=ad_group[1]),
        ad_group_criterion=SimpleNamespace(
            criterion_id=criterion_id,
            keyword=SimpleNamespace(text=text, match_type=_match_type(match_type)),
        ),
    )


@pytest.fixture
def api_client():
    """Google Ads API client double."""
    client = Mock()
    client.search_stream.return_value = iter([])
    return client


@pytest.fixture
def provider(api_client):
    """Provider for a dashed customer id."""
    return GoogleAdsDataProvider(api_client, "123-456-7890")


class TestGoogleAdsDataProvider:
    """Test GAQL queries and row mapping."""

    def test_customer_id_validated(self, api_client):
        """Test the customer id is cleaned and checked."""
        assert GoogleAdsDataProvider(api_client, "123-456-7890").customer_id == "1234567890"
        with pytest.raises(ValueError, match="Invalid customer ID"):
            GoogleAdsDataProvider(api_client, "abc")

    def test_positive_keywords(self, provider, api_client):
        """Test enabled positives are mapped to records."""
        api_client.search_stream.return_value = iter(
            [_keyword_row(101, "Vacuum  Pump", "PHRASE")]
        )

        records = list(provider.list_active_positive_keywords())

        query = api_client.search_stream.call_args.args[1]
        assert api_client.search_stream.call_args.args[0] == "1234567890"
        assert "FROM ad_group_criterion" in query
        assert "ad_group_criterion.negative = FALSE" in query
        assert "campaign.status = 'ENABLED'" in query
        assert "ad_group.status = 'ENABLED'" in query

        assert len(records) == 1
        record = records[0]
        assert record.text == "vacuum pump"
        assert record.match_type == "PHRASE"
        assert record.keyword_id == "101"
        assert record.campaign_id == "1"
        assert record.ad_group_id == "11"
        assert record.ad_group_name == "Vacuum"

    def test_positive_keywords_by_date_range(self, provider, api_client):
        """Test a date range switches to keyword_view and dedupes daily rows."""
        api_client.search_stream.return_value = iter(
            [
                _keyword_row(101, "vacuum pump", "BROAD"),
                _keyword_row(101, "vacuum pump", "BROAD"),
                _keyword_row(102, "liquid ring pump", "BROAD"),
            ]
        )
        date_range = DateRange(start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))

        records = list(provider.list_active_positive_keywords(date_range))

        query = api_client.search_stream.call_args.args[1]
        assert "FROM keyword_view" in query
        assert "segments.date BETWEEN '2026-01-01' AND '2026-01-31'" in query
        assert [r.keyword_id for r in records] == ["101", "102"]

    def test_listing_is_lazy(self, provider, api_client):
        """Test nothing is requested until the iterator is consumed."""
        records = provider.list_ad_group_negative_keywords()
        api_client.search_stream.assert_not_called()
        assert list(records) == []
        api_client.search_stream.assert_called_once()

    def test_ad_group_negatives(self, provider, api_client):
        """Test ad group negatives carry campaign and ad group identity."""
        api_client.search_stream.return_value = iter([_keyword_row(201, "ed", "PHRASE")])

        records = list(provider.list_ad_group_negative_keywords())

        assert "ad_group_criterion.negative = TRUE" in api_client.search_stream.call_args.args[1]
        assert records[0].level == NegativeKeywordLevel.AD_GROUP
        assert records[0].criterion_id == "201"
        assert records[0].has_scope_identity()

    def test_campaign_negatives(self, provider, api_client):
        """Test campaign negatives are read from campaign_criterion."""
        api_client.search_stream.return_value = iter(
            [
                SimpleNamespace(
                    campaign=SimpleNamespace(id=1, name="Pumps"),
                    campaign_criterion=SimpleNamespace(
                        criterion_id=301,
                        keyword=SimpleNamespace(text="free", match_type=_match_type("BROAD")),
                    ),
                )
            ]
        )

        records = list(provider.list_campaign_negative_keywords())

        assert "FROM campaign_criterion" in api_client.search_stream.call_args.args[1]
        assert records[0].level == NegativeKeywordLevel.CAMPAIGN
        assert records[0].campaign_id == "1"
        assert records[0].ad_group_id is None

    def test_shared_lists(self, provider, api_client):
        """Test enabled negative keyword shared sets are listed."""
        api_client.search_stream.return_value = iter(
            [
                SimpleNamespace(shared_set=SimpleNamespace(id=501, name="Global")),
                SimpleNamespace(shared_set=SimpleNamespace(id=0, name="Broken")),
            ]
        )

        lists = list(provider.list_shared_negative_lists())

        query = api_client.search_stream.call_args.args[1]
        assert "shared_set.type = 'NEGATIVE_KEYWORDS'" in query
        assert [(s.id, s.name) for s in lists] == [("501", "Global")]

    def test_shared_list_negatives(self, provider, api_client):
        """Test shared list keywords are fetched for one validated list id."""
        api_client.search_stream.return_value = iter(
            [
                SimpleNamespace(
                    shared_set=SimpleNamespace(id=501, name="Global"),
                    shared_criterion=SimpleNamespace(
                        criterion_id=601,
                        keyword=SimpleNamespace(text="mini", match_type=_match_type("PHRASE")),
                    ),
                )
            ]
        )

        records = list(provider.list_shared_list_negative_keywords("501"))

        assert "shared_set.id = 501" in api_client.search_stream.call_args.args[1]
        assert records[0].level == NegativeKeywordLevel.SHARED_SET
        assert records[0].shared_set_id == "501"
        assert records[0].shared_set_name == "Global"

    def test_shared_list_id_must_be_numeric(self, provider, api_client):
        """Test a non-numeric list id never reaches a query."""
        with pytest.raises(ValueError, match="shared set"):
            list(provider.list_shared_list_negative_keywords("1 OR 1=1"))
        api_client.search_stream.assert_not_called()

    def test_campaigns_attached_to(self, provider, api_client):
        """Test attachments are read from enabled campaign_shared_set rows."""
        api_client.search_stream.return_value = iter(
            [
                SimpleNamespace(campaign=SimpleNamespace(id=1)),
                SimpleNamespace(campaign=SimpleNamespace(id=2)),
                SimpleNamespace(campaign=SimpleNamespace(id=1)),
            ]
        )

        attached = provider.list_campaigns_attached_to("501")

        query = api_client.search_stream.call_args.args[1]
        assert "FROM campaign_shared_set" in query
        assert "campaign_shared_set.status = 'ENABLED'" in query
        assert attached == {"1", "2"}

    def test_remove_delegates_to_client(self, provider, api_client, make_negative):
        """Test removal goes through the client for this customer."""
        negative = make_negative("medical")
        api_client.remove_negative_criterion.return_value = True

        assert provider.remove_negative_keyword(negative) is True
        api_client.remove_negative_criterion.assert_called_once_with("1234567890", negative)
