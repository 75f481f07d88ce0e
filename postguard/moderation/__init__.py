"""Moderation — classify post text against categorized word lists.

The pipeline is:
1. Lexicon — static, categorized terms (loaded once per process)
2. Matcher — whole-word / whole-phrase, case-insensitive lookups
3. Moderator — per-text evaluation and per-record aggregation
4. Messages — human-readable rejection text for a flagged result
"""

from postguard.moderation.messages import describe_violations
from postguard.moderation.models import (
    Category,
    CategoryViolation,
    InvalidFieldValueError,
    LexiconError,
    ModerationResult,
    PostFields,
)
from postguard.moderation.moderator import (
    ContentModerator,
    evaluate_record,
    evaluate_text,
    moderate_text,
)

__all__ = [
    "Category",
    "CategoryViolation",
    "ContentModerator",
    "InvalidFieldValueError",
    "LexiconError",
    "ModerationResult",
    "PostFields",
    "describe_violations",
    "evaluate_record",
    "evaluate_text",
    "moderate_text",
]
