"""Pytest configuration and shared fixtures for NegativeGuard tests."""

import os

import pytest

from negativeguard.models.keyword import (
    NegativeKeywordLevel,
    NegativeKeywordRecord,
    PositiveKeywordRecord,
    SharedNegativeList,
)


@pytest.fixture
def make_positive():
    """Factory for positive keyword records with sensible defaults."""

    def _make(text, match_type="BROAD", campaign_id="C1", ad_group_id="A1", **kwargs):
        kwargs.setdefault("campaign_name", f"Campaign {campaign_id}")
        kwargs.setdefault("ad_group_name", f"Ad Group {ad_group_id}")
        return PositiveKeywordRecord(
            text=text,
            match_type=match_type,
            campaign_id=campaign_id,
            ad_group_id=ad_group_id,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_negative():
    """Factory for negative keyword records at any level."""

    def _make(text, match_type="BROAD", level=NegativeKeywordLevel.AD_GROUP, **kwargs):
        if level == NegativeKeywordLevel.AD_GROUP:
            kwargs.setdefault("campaign_id", "C1")
            kwargs.setdefault("ad_group_id", "A1")
        elif level == NegativeKeywordLevel.CAMPAIGN:
            kwargs.setdefault("campaign_id", "C1")
        else:
            kwargs.setdefault("shared_set_id", "S1")
            kwargs.setdefault("shared_set_name", "Shared List S1")
        kwargs.setdefault("criterion_id", "1001")
        return NegativeKeywordRecord(text=text, match_type=match_type, level=level, **kwargs)

    return _make


@pytest.fixture
def shared_list():
    """A shared negative list."""
    return SharedNegativeList(id="S1", name="Shared List S1")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no NG_* variables set."""
    for key in list(os.environ):
        if key.startswith("NG_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    saved = dict(os.environ)
    yield monkeypatch
    # load_dotenv writes to os.environ directly
    os.environ.clear()
    os.environ.update(saved)
