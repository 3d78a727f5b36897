"""Pydantic data models, the shared business objects.

Upstream records stay plain dicts (their shape belongs to the API provider);
everything this package produces or loads from disk is a model defined here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .numbers import optional_str, parse_number_like

# Fields an override entry may replace, in the order they are applied.
OVERRIDABLE_FIELDS = (
    "pricing",
    "median_output_tokens_per_second",
    "median_time_to_first_token_seconds",
    "median_time_to_first_answer_token",
    "release_date",
)


class ModelCreator(BaseModel):
    """The organization that published a model."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class OverrideEntry(BaseModel):
    """Manual correction for one model.

    Only fields present in the source JSON count as overrides; an explicit
    ``null`` clears the field, an absent key leaves the upstream value alone.
    """

    model_config = ConfigDict(extra="ignore")

    pricing: Optional[dict[str, Any]] = None
    median_output_tokens_per_second: Optional[float] = None
    median_time_to_first_token_seconds: Optional[float] = None
    median_time_to_first_answer_token: Optional[float] = None
    release_date: Optional[str] = None

    @field_validator(
        "median_output_tokens_per_second",
        "median_time_to_first_token_seconds",
        "median_time_to_first_answer_token",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> Optional[float]:
        return parse_number_like(value)

    @field_validator("release_date", mode="before")
    @classmethod
    def _coerce_release_date(cls, value: Any) -> Optional[str]:
        return optional_str(value)

    def present_fields(self) -> dict[str, Any]:
        """Return only the fields the entry actually sets."""
        return {name: getattr(self, name) for name in OVERRIDABLE_FIELDS if name in self.model_fields_set}


class NormalizedModelRecord(BaseModel):
    """One leaderboard row: parsed metrics, aggregate score, and post-override fields."""

    id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    slug: Optional[str] = None
    creator: Optional[ModelCreator] = None
    evaluations: dict[str, Any] = Field(default_factory=dict, description="Raw upstream evaluations, passed through")
    metric_values: dict[str, Optional[float]] = Field(default_factory=dict)
    missing_keys: list[str] = Field(default_factory=list)
    missing_count: int = 0
    sum_score: float = Field(0.0, description="Sum of parsed metric values; missing metrics contribute 0")
    release_date: Optional[str] = None
    pricing: Optional[dict[str, Any]] = None
    median_output_tokens_per_second: Optional[float] = None
    median_time_to_first_token_seconds: Optional[float] = None
    median_time_to_first_answer_token: Optional[float] = None
    override_key: Optional[str] = Field(None, description="Candidate identifier that matched an override")


class LeaderboardResult(BaseModel):
    """Envelope returned by a refresh and served from the cache."""

    status: int = 200
    fetched_at: datetime
    data: list[NormalizedModelRecord]

    @property
    def count(self) -> int:
        return len(self.data)
