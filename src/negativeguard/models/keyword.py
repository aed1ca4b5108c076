"""Keyword data models."""

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from negativeguard.core.exceptions import MalformedRecordError
from negativeguard.models.base import BaseNGModel


class KeywordMatchType(str, Enum):
    """Keyword match type values."""

    EXACT = "EXACT"
    PHRASE = "PHRASE"
    BROAD = "BROAD"

    @classmethod
    def parse(cls, value: Any) -> "KeywordMatchType | None":
        """Return the matching member, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class NegativeKeywordLevel(str, Enum):
    """Scope at which a negative keyword is defined."""

    AD_GROUP = "AD_GROUP"
    CAMPAIGN = "CAMPAIGN"
    SHARED_SET = "SHARED_SET"


def normalize_keyword_text(text: str | None) -> str:
    """Lowercase, trim and collapse internal whitespace to single spaces."""
    if not text:
        return ""
    return " ".join(text.lower().split())


def _clean_match_type(value: Any) -> str:
    if isinstance(value, KeywordMatchType):
        return value.value
    if value is None:
        return ""
    return str(value).strip().upper()


class PositiveKeywordRecord(BaseNGModel):
    """Snapshot of one enabled keyword the advertiser bids on."""

    model_config = ConfigDict(frozen=True)

    keyword_id: str | None = Field(None, description="Google Ads criterion ID")
    text: str = Field(..., description="Normalized keyword text")
    match_type: str = Field(..., description="Match type as reported by the platform")
    campaign_id: str | None = Field(None, description="Parent campaign ID")
    campaign_name: str = Field(default="", description="Parent campaign name")
    ad_group_id: str | None = Field(None, description="Parent ad group ID")
    ad_group_name: str = Field(default="", description="Parent ad group name")

    @field_validator("text", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> str:
        return normalize_keyword_text(v)

    @field_validator("match_type", mode="before")
    @classmethod
    def normalize_match_type(cls, v: Any) -> str:
        return _clean_match_type(v)

    def has_scope_identity(self) -> bool:
        """Check the record can be placed in a (campaign, ad group) bucket."""
        return bool(self.campaign_id) and bool(self.ad_group_id)


class NegativeKeywordRecord(BaseNGModel):
    """One negative keyword that may be flagged and removed."""

    model_config = ConfigDict(frozen=True)

    criterion_id: str | None = Field(None, description="Google Ads criterion ID")
    text: str = Field(..., description="Normalized negative keyword text")
    match_type: str = Field(..., description="Match type as reported by the platform")
    level: NegativeKeywordLevel = Field(..., description="Scope of the negative")

    campaign_id: str | None = None
    campaign_name: str = ""
    ad_group_id: str | None = None
    ad_group_name: str = ""
    shared_set_id: str | None = None
    shared_set_name: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> str:
        return normalize_keyword_text(v)

    @field_validator("match_type", mode="before")
    @classmethod
    def normalize_match_type(cls, v: Any) -> str:
        return _clean_match_type(v)

    def missing_identity_fields(self) -> list[str]:
        """List the identity fields this record's level requires but lacks."""
        if self.level == NegativeKeywordLevel.AD_GROUP:
            required = ["campaign_id", "ad_group_id"]
        elif self.level == NegativeKeywordLevel.CAMPAIGN:
            required = ["campaign_id"]
        else:
            required = ["shared_set_id"]
        return [name for name in required if not getattr(self, name)]

    def has_scope_identity(self) -> bool:
        """Check the record carries the ids needed to resolve its scope."""
        return not self.missing_identity_fields()

    def require_scope_identity(self) -> None:
        """Raise MalformedRecordError when a scope identity field is missing."""
        missing = self.missing_identity_fields()
        if missing:
            raise MalformedRecordError(
                f"{self.level} negative '{self.text}' is missing {', '.join(missing)}",
                missing_fields=missing,
            )

    @property
    def scope_label(self) -> str:
        """Human-readable name of the scope the negative lives in."""
        if self.level == NegativeKeywordLevel.AD_GROUP:
            return f"{self.campaign_name} > {self.ad_group_name}"
        if self.level == NegativeKeywordLevel.CAMPAIGN:
            return self.campaign_name
        return self.shared_set_name


class SharedNegativeList(BaseNGModel):
    """A shared negative keyword list (Google Ads shared set)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
