"""Tests for the positive keyword index."""

import logging

from negativeguard.analyzers.keyword_index import PositiveKeywordIndex


class TestIndexBuild:
    """Test building the index from a record stream."""

    def test_groups_by_campaign_and_ad_group(self, make_positive):
        """Test records land in their (campaign, ad group) bucket."""
        index = PositiveKeywordIndex.build(
            [
                make_positive("vacuum pump", campaign_id="C1", ad_group_id="A1"),
                make_positive("liquid ring pump", campaign_id="C1", ad_group_id="A2"),
                make_positive("vacuum pump", campaign_id="C2", ad_group_id="A3"),
            ]
        )

        assert len(index) == 3
        assert index.all_texts == {"vacuum pump", "liquid ring pump"}
        assert [k.text for k in index.for_ad_group("C1", "A1")] == ["vacuum pump"]
        assert {k.text for k in index.for_campaign("C1")} == {
            "vacuum pump",
            "liquid ring pump",
        }
        assert index.truncated is False

    def test_consumes_lazy_stream(self, make_positive):
        """Test a generator is accepted and read once."""
        records = (make_positive(text) for text in ["a pump", "b pump"])
        index = PositiveKeywordIndex.build(records)
        assert len(index) == 2

    def test_skips_records_without_scope_ids(self, make_positive, caplog):
        """Test records missing campaign or ad group ids are counted and skipped."""
        with caplog.at_level(logging.WARNING):
            index = PositiveKeywordIndex.build(
                [
                    make_positive("vacuum pump"),
                    make_positive("orphan", campaign_id=None),
                    make_positive("orphan two", ad_group_id=""),
                ]
            )

        assert len(index) == 1
        assert index.skipped_records == 2
        assert "orphan" not in index.all_texts
        assert "Skipping positive keyword 'orphan'" in caplog.text


class TestProcessingCap:
    """Test the maximum keyword safeguard."""

    def test_cap_truncates_and_warns(self, make_positive, caplog):
        """Test ingestion stops at the cap and the index is marked truncated."""
        records = [make_positive(f"pump {i}") for i in range(5)]

        with caplog.at_level(logging.WARNING):
            index = PositiveKeywordIndex.build(records, max_keywords=3)

        assert len(index) == 3
        assert index.truncated is True
        assert "maximum of 3 keywords" in caplog.text

    def test_cap_equal_to_stream_is_not_truncated(self, make_positive):
        """Test reaching the cap exactly with nothing left is a full index."""
        records = [make_positive(f"pump {i}") for i in range(3)]
        index = PositiveKeywordIndex.build(records, max_keywords=3)

        assert len(index) == 3
        assert index.truncated is False

    def test_cap_stops_reading_the_stream(self, make_positive):
        """Test no records beyond the first extra one are pulled."""
        pulled = []

        def stream():
            for i in range(100):
                pulled.append(i)
                yield make_positive(f"pump {i}")

        PositiveKeywordIndex.build(stream(), max_keywords=2)
        assert len(pulled) == 3

    def test_cap_counts_skipped_records(self, make_positive):
        """Test malformed records count toward the cap."""
        pulled = []

        def stream():
            for i in range(1000):
                pulled.append(i)
                yield make_positive(f"orphan {i}", campaign_id=None)

        index = PositiveKeywordIndex.build(stream(), max_keywords=10)

        assert len(pulled) == 11
        assert index.skipped_records == 10
        assert index.truncated is True
        assert len(index) == 0


class TestLookups:
    """Test scoped lookups."""

    def test_unknown_scope_is_empty(self, make_positive):
        """Test lookups for unknown ids return empty lists."""
        index = PositiveKeywordIndex.build([make_positive("vacuum pump")])

        assert index.for_ad_group("C9", "A1") == []
        assert index.for_campaign("C9") == []
        assert index.for_campaigns(set()) == []

    def test_for_campaigns_unions_campaigns(self, make_positive):
        """Test multi-campaign lookup returns positives from each campaign."""
        index = PositiveKeywordIndex.build(
            [
                make_positive("pump one", campaign_id="C1"),
                make_positive("pump two", campaign_id="C2"),
                make_positive("pump three", campaign_id="C3"),
            ]
        )

        texts = {k.text for k in index.for_campaigns({"C1", "C3"})}
        assert texts == {"pump one", "pump three"}

    def test_lookups_return_copies(self, make_positive):
        """Test callers cannot mutate the index through a lookup result."""
        index = PositiveKeywordIndex.build([make_positive("vacuum pump")])

        index.for_ad_group("C1", "A1").clear()
        assert len(index.for_ad_group("C1", "A1")) == 1
