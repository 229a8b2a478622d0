"""Keyword lookup of tutorial and parts links for a diagnosis reply."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from app.models.diagnosis import Suggestion
from app.suggestion_registry import SUGGESTION_ROWS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionGroup:
    keywords: tuple[str, ...]
    suggestions: tuple[Suggestion, ...]


def build_table(rows: Iterable[dict]) -> tuple[SuggestionGroup, ...]:
    """Freeze registry rows into an ordered, read-only lookup table."""
    table = []
    for row in rows:
        keywords = tuple(k.lower() for k in row.get("keywords", []) if k)
        suggestions = tuple(Suggestion(**s) for s in row.get("suggestions", []))
        if not keywords or not suggestions:
            logger.warning("Skipping suggestion row without keywords or links: %s", row)
            continue
        table.append(SuggestionGroup(keywords=keywords, suggestions=suggestions))
    return tuple(table)


SUGGESTION_TABLE = build_table(SUGGESTION_ROWS)


def match_suggestions(
    text: str,
    table: tuple[SuggestionGroup, ...] = SUGGESTION_TABLE,
) -> list[Suggestion]:
    """Return the links of every group with a keyword in ``text``.

    Matching is a case-insensitive substring test. A group is added once per
    matching keyword, then duplicates are dropped by URL keeping the first.
    """
    if not text:
        return []
    haystack = text.lower()

    matched: list[Suggestion] = []
    for group in table:
        for keyword in group.keywords:
            if keyword in haystack:
                matched.extend(group.suggestions)

    seen: set[str] = set()
    unique = []
    for suggestion in matched:
        if suggestion.url in seen:
            continue
        seen.add(suggestion.url)
        unique.append(suggestion)
    return unique
