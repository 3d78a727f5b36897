"""Record normalization and aggregate scoring.

Turns heterogeneous upstream records into NormalizedModelRecord rows:
numeric-like metric values are coerced, summed into one aggregate score,
and manual overrides are layered on top field by field.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from .models import ModelCreator, NormalizedModelRecord
from .numbers import optional_str as _optional_str, parse_number_like
from .overrides import OverrideStore

logger = logging.getLogger(__name__)

# Benchmarks summed into the aggregate score
METRICS: tuple[str, ...] = (
    "artificial_analysis_intelligence_index",
    "artificial_analysis_coding_index",
    "artificial_analysis_math_index",
    "lcr",
    "hle",
    "mmlu_pro",
    "gpqa",
    "livecodebench",
    "scicode",
    "math_500",
    "aime",
    "aime_25",
    "ifbench",
    "tau2",
    "terminalbench_hard",
)

NUMERIC_FIELDS = (
    "median_output_tokens_per_second",
    "median_time_to_first_token_seconds",
    "median_time_to_first_answer_token",
)


def _creator(raw: dict) -> Optional[ModelCreator]:
    creator = raw.get("model_creator")
    if not isinstance(creator, dict):
        return None
    return ModelCreator.model_validate({k: (_optional_str(v) if k in ("id", "name", "slug") else v) for k, v in creator.items()})


def normalize_record(
    raw: dict,
    overrides: Optional[OverrideStore] = None,
    metrics: Sequence[str] = METRICS,
) -> NormalizedModelRecord:
    """Map one upstream record to a NormalizedModelRecord.

    Each metric is coerced with parse_number_like; parsed values are summed,
    unparseable or absent ones are recorded in ``missing_keys`` and add 0.
    Optional fields default to the raw value (or None), then the first
    matching override replaces only the fields it sets. ``raw`` is not mutated.
    """
    evaluations = raw.get("evaluations") or {}
    if not isinstance(evaluations, dict):
        evaluations = {}

    metric_values: dict[str, Optional[float]] = {}
    missing_keys: list[str] = []
    total = 0.0
    for key in metrics:
        number = parse_number_like(evaluations.get(key))
        metric_values[key] = number
        if number is None:
            missing_keys.append(key)
        else:
            total += number

    fields: dict[str, Any] = {
        "release_date": _optional_str(raw.get("release_date")),
        "pricing": raw.get("pricing") if isinstance(raw.get("pricing"), dict) else None,
    }
    for name in NUMERIC_FIELDS:
        fields[name] = parse_number_like(raw.get(name))

    override_key = None
    match = overrides.find(raw) if overrides is not None else None
    if match is not None:
        override_key, entry = match
        fields.update(entry.present_fields())

    name = _optional_str(raw.get("name"))
    return NormalizedModelRecord(
        id=_optional_str(raw.get("id")),
        name=name,
        display_name=_optional_str(raw.get("display_name")) or name,
        slug=_optional_str(raw.get("slug")),
        creator=_creator(raw),
        evaluations=dict(evaluations),
        metric_values=metric_values,
        missing_keys=missing_keys,
        missing_count=len(missing_keys),
        sum_score=total,
        override_key=override_key,
        **fields,
    )


def rank_by_score(records: Iterable[NormalizedModelRecord]) -> list[NormalizedModelRecord]:
    """Sort descending by sum_score; equal scores keep their input order."""
    return sorted(records, key=lambda r: r.sum_score, reverse=True)


def build_leaderboard(
    raw_records: Iterable[dict],
    overrides: Optional[OverrideStore] = None,
    metrics: Sequence[str] = METRICS,
) -> list[NormalizedModelRecord]:
    """Normalize every raw record and rank the result."""
    normalized = [normalize_record(raw, overrides, metrics) for raw in raw_records if isinstance(raw, dict)]
    overridden = sum(1 for r in normalized if r.override_key is not None)
    logger.debug("Normalized %d models (%d with overrides)", len(normalized), overridden)
    return rank_by_score(normalized)
