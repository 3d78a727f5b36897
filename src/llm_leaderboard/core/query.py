"""Leaderboard views: re-score, search, and sort already-normalized records.

These mirror what the browser table lets a user do (pick metric columns,
type a search, click a column header) so MCP clients get the same views.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from .models import NormalizedModelRecord
from .numbers import parse_number_like
from .scoring import METRICS

# Shorthand sort keys for the pricing columns
PRICE_KEYS = {
    "price_blend": "price_1m_blended_3_to_1",
    "price_input": "price_1m_input_tokens",
    "price_output": "price_1m_output_tokens",
}

SORT_FIELDS = (
    "sum_score",
    "missing_count",
    "release_date",
    "median_output_tokens_per_second",
    "median_time_to_first_token_seconds",
    "median_time_to_first_answer_token",
)


def rescore(records: Iterable[NormalizedModelRecord], metrics: Sequence[str]) -> list[NormalizedModelRecord]:
    """Recompute sum_score and missing keys over a subset of the metric set.

    Returns copies; order is preserved. Raises ValueError on unknown metrics.
    """
    metrics = list(dict.fromkeys(metrics))
    unknown = [m for m in metrics if m not in METRICS]
    if unknown:
        raise ValueError(f"Unknown metrics: {', '.join(unknown)}. Choose from: {', '.join(METRICS)}")

    rescored = []
    for record in records:
        missing = [m for m in metrics if record.metric_values.get(m) is None]
        total = sum(record.metric_values[m] for m in metrics if record.metric_values.get(m) is not None)
        rescored.append(record.model_copy(update={
            "sum_score": total,
            "missing_keys": missing,
            "missing_count": len(missing),
        }))
    return rescored


def filter_records(records: Iterable[NormalizedModelRecord], query: str = "") -> list[NormalizedModelRecord]:
    """Keep records whose display name or creator name contains ``query`` (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return list(records)
    matches = []
    for record in records:
        display = (record.display_name or "").lower()
        creator = (record.creator.name if record.creator and record.creator.name else "").lower()
        if needle in display or needle in creator:
            matches.append(record)
    return matches


def sort_value(record: NormalizedModelRecord, key: str) -> Optional[Any]:
    """Value of a sortable column, or None when the record has none."""
    if key in METRICS:
        return record.metric_values.get(key)
    if key in PRICE_KEYS:
        if not record.pricing:
            return None
        return parse_number_like(record.pricing.get(PRICE_KEYS[key]))
    if key in SORT_FIELDS:
        return getattr(record, key)
    raise ValueError(f"Cannot sort by {key!r}")


def sort_records(
    records: Iterable[NormalizedModelRecord],
    key: str = "sum_score",
    descending: bool = True,
) -> list[NormalizedModelRecord]:
    """Stable sort by a column; records without a value always go last."""
    if key not in METRICS and key not in PRICE_KEYS and key not in SORT_FIELDS:
        raise ValueError(f"Cannot sort by {key!r}")
    records = list(records)
    present = [r for r in records if sort_value(r, key) is not None]
    absent = [r for r in records if sort_value(r, key) is None]
    present.sort(key=lambda r: sort_value(r, key), reverse=descending)
    return present + absent
