"""Content moderator — evaluates texts and whole post records.

Each text is checked against every category of the lexicon, in category
order. A record (a mapping of field name to text, list of text or None, or a
``PostFields``) is checked field by field and the findings are merged so
that each category appears once with its terms deduplicated.

The moderator holds no per-call state; one instance can serve any number of
concurrent callers.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Iterable, Mapping, Optional, Union

from postguard.moderation.lexicon import Lexicon, get_lexicon
from postguard.moderation.matcher import find_matches
from postguard.moderation.models import (
    Category,
    CategoryViolation,
    InvalidFieldValueError,
    ModerationResult,
    PostFields,
)

logger = logging.getLogger(__name__)

Record = Union[Mapping[str, Any], PostFields]


class ContentModerator:
    """Stateless content moderator bound to one lexicon."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self.lexicon = lexicon if lexicon is not None else get_lexicon()

    # -- single text ---------------------------------------------------------

    def evaluate_text(self, text: Optional[str]) -> list[CategoryViolation]:
        """Return one violation per category with at least one match.

        ``None`` and the empty string are clean.
        """
        if text is None:
            return []
        if not isinstance(text, str):
            raise InvalidFieldValueError("text", text)
        if not text:
            return []

        violations = []
        for category in Category:
            found = find_matches(text, self.lexicon.terms(category))
            if found:
                violations.append(CategoryViolation(category, tuple(found)))
        return violations

    def moderate_text(self, text: Optional[str]) -> ModerationResult:
        """Evaluate a single text and wrap the findings in a result."""
        return ModerationResult(tuple(self.evaluate_text(text)))

    # -- whole record --------------------------------------------------------

    def evaluate_record(self, fields: Record) -> ModerationResult:
        """Evaluate every field of a post and merge findings per category."""
        if isinstance(fields, PostFields):
            items: Iterable[tuple[str, Any]] = fields.items()
        elif isinstance(fields, Mapping):
            items = fields.items()
        else:
            raise TypeError(
                f"Expected a mapping or PostFields, got {type(fields).__name__}"
            )

        found: dict[Category, dict[str, None]] = {}
        for name, value in items:
            for text in _field_texts(name, value):
                for violation in self.evaluate_text(text):
                    terms = found.setdefault(violation.category, {})
                    terms.update(dict.fromkeys(violation.matched_terms))
            logger.debug("Evaluated field '%s'", name)

        result = ModerationResult(
            tuple(
                CategoryViolation(category, tuple(found[category]))
                for category in Category
                if category in found
            )
        )
        if not result.is_clean:
            logger.info(
                "Post flagged for: %s",
                ", ".join(c.value for c in result.categories),
            )
        return result


def _field_texts(name: str, value: Any) -> list[str]:
    """Non-empty texts held by one field. Rejects unsupported value types."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        texts = []
        for i, item in enumerate(value):
            if item is None:
                continue
            if not isinstance(item, str):
                raise InvalidFieldValueError(f"{name}[{i}]", item)
            if item:
                texts.append(item)
        return texts
    raise InvalidFieldValueError(name, value)


@lru_cache(maxsize=1)
def default_moderator() -> ContentModerator:
    """Shared moderator over the process-wide lexicon."""
    return ContentModerator(get_lexicon())


def evaluate_text(text: Optional[str]) -> list[CategoryViolation]:
    return default_moderator().evaluate_text(text)


def moderate_text(text: Optional[str]) -> ModerationResult:
    return default_moderator().moderate_text(text)


def evaluate_record(fields: Record) -> ModerationResult:
    """Moderate all text fields of a post with the process-wide lexicon."""
    return default_moderator().evaluate_record(fields)
