"""Manual override store.

Overrides live in a JSON file mapping a model identifier to the fields that
should replace upstream values, e.g.::

    {
      "openai/gpt-4o": {"pricing": {"price_1m_blended_3_to_1": 4.38}},
      "claude-3-5-sonnet": {"release_date": "2024-06-20"}
    }

Identifiers are matched case-insensitively against several candidates per
model (id, slug, name, creator/slug). The lookup index is built once at load.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .models import OverrideEntry

logger = logging.getLogger(__name__)


def candidate_keys(raw: dict) -> list[str]:
    """Identifiers to try for a raw record, highest priority first."""
    candidates = []
    for field in ("id", "slug", "name"):
        if raw.get(field):
            candidates.append(str(raw[field]))

    slug = raw.get("slug")
    creator = raw.get("model_creator")
    if slug and isinstance(creator, dict):
        if creator.get("id"):
            candidates.append(f"{creator['id']}/{slug}")
        if creator.get("slug"):
            candidates.append(f"{creator['slug']}/{slug}")
    return candidates


def find_override(raw: dict, index: Mapping[str, OverrideEntry]) -> Optional[tuple[str, OverrideEntry]]:
    """Return ``(candidate, entry)`` for the first candidate present in ``index``.

    ``index`` must be keyed by lowercased identifiers.
    """
    for candidate in candidate_keys(raw):
        entry = index.get(candidate.lower())
        if entry is not None:
            return candidate, entry
    return None


class OverrideStore:
    """Case-insensitive index of override entries."""

    def __init__(self, entries: Optional[Mapping[str, OverrideEntry]] = None):
        self._index: dict[str, OverrideEntry] = {}
        for key, entry in (entries or {}).items():
            self._index[str(key).lower()] = entry

    def __len__(self) -> int:
        return len(self._index)

    @property
    def index(self) -> Mapping[str, OverrideEntry]:
        return self._index

    def find(self, raw: dict) -> Optional[tuple[str, OverrideEntry]]:
        return find_override(raw, self._index)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OverrideStore":
        """Build a store from decoded JSON, skipping entries that fail validation."""
        entries = {}
        for key, value in data.items():
            try:
                entries[key] = OverrideEntry.model_validate(value)
            except ValidationError as exc:
                logger.warning("Skipping invalid override for %r: %s", key, exc)
        return cls(entries)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "OverrideStore":
        """Load overrides from a JSON file.

        A missing or unreadable file yields an empty store; the server keeps
        running without overrides.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No overrides file at %s; continuing without overrides", path)
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to load overrides from %s: %s", path, exc)
            return cls()

        if not isinstance(data, dict):
            logger.error("Overrides file %s must contain a JSON object, got %s", path, type(data).__name__)
            return cls()

        store = cls.from_mapping(data)
        logger.info("Loaded %s (%d keys)", path.name, len(store))
        return store
