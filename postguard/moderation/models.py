"""Data models for the content moderation system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional


class Category(Enum):
    """A class of disallowed content.

    Declaration order is the evaluation order, and therefore the order of
    violations in every result.
    """

    PROFANITY = "profanity"
    HATE_SPEECH = "hate_speech"
    ANTI_CHRISTIAN = "anti_christian"  # Targeted disparagement of the faith
    NUDITY = "nudity"  # Explicit / sexual content


class InvalidFieldValueError(TypeError):
    """A record field held a value that is neither text, a list of text, nor None."""

    def __init__(self, field_name: str, value: object) -> None:
        self.field_name = field_name
        self.value_type = type(value).__name__
        super().__init__(
            f"Field '{field_name}' must be a string, a list of strings or None, "
            f"got {self.value_type}"
        )


class LexiconError(ValueError):
    """Lexicon data failed validation."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = list(issues)
        super().__init__("Invalid lexicon: " + "; ".join(self.issues))


@dataclass(frozen=True)
class CategoryViolation:
    """All terms of one category found in the moderated content."""

    category: Category
    matched_terms: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.matched_terms, str):
            raise TypeError("matched_terms must be a sequence of terms, not a single string")
        if not self.matched_terms:
            raise ValueError(f"A {self.category.value} violation needs at least one matched term")
        # Keep first occurrence of each term
        object.__setattr__(self, "matched_terms", tuple(dict.fromkeys(self.matched_terms)))

    def to_dict(self) -> dict:
        return {"category": self.category.value, "words": list(self.matched_terms)}


@dataclass(frozen=True)
class ModerationResult:
    """Verdict for a text or a whole post record."""

    violations: tuple[CategoryViolation, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "violations", tuple(self.violations))
        seen = [v.category for v in self.violations]
        if len(seen) != len(set(seen)):
            raise ValueError("At most one violation per category is allowed")

    @property
    def is_clean(self) -> bool:
        return not self.violations

    @property
    def categories(self) -> list[Category]:
        return [v.category for v in self.violations]

    def violation_for(self, category: Category) -> Optional[CategoryViolation]:
        for v in self.violations:
            if v.category == category:
                return v
        return None

    def to_dict(self) -> dict:
        return {
            "is_clean": self.is_clean,
            "violations": [v.to_dict() for v in self.violations],
        }


# Field accessors of a post submission, in the order they are moderated
MODERATED_FIELDS: tuple[str, ...] = (
    "preacher",
    "my_word",
    "my_response",
    "my_affirmation",
    "my_testimony",
    "prayer_points",
)

# Keys used by the create-post form
_FORM_KEYS: dict[str, str] = {
    "preacher": "preacher",
    "myWord": "my_word",
    "myResponse": "my_response",
    "myAffirmation": "my_affirmation",
    "myTestimony": "my_testimony",
    "prayerPoints": "prayer_points",
}


@dataclass
class PostFields:
    """The user-written text fields of a journal post."""

    preacher: Optional[str] = None
    my_word: Optional[str] = None
    my_response: Optional[str] = None
    my_affirmation: Optional[str] = None
    my_testimony: Optional[str] = None
    prayer_points: list[str] = field(default_factory=list)

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(field_name, value)`` pairs in moderation order."""
        for name in MODERATED_FIELDS:
            yield name, getattr(self, name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PostFields:
        """Build from a dict with snake_case or form (camelCase) keys.

        Keys that are not post text fields are ignored. Blank prayer points
        are dropped, matching what the form submits.
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _FORM_KEYS.get(key, key)
            if name in MODERATED_FIELDS:
                values[name] = value

        points = values.get("prayer_points")
        if points is None:
            values["prayer_points"] = []
        elif isinstance(points, (list, tuple)):
            values["prayer_points"] = [
                p for p in points if not (isinstance(p, str) and not p.strip())
            ]
        else:
            raise InvalidFieldValueError("prayer_points", points)

        return cls(**values)
