"""User-facing rejection messages for flagged posts."""

from __future__ import annotations

from postguard.moderation.models import Category, ModerationResult

VIOLATION_MESSAGES: dict[Category, str] = {
    Category.PROFANITY: "Your post contains profanity or cursing",
    Category.HATE_SPEECH: "Your post contains hate speech or violent language",
    Category.ANTI_CHRISTIAN: "Your post contains content that goes against Christian values",
    Category.NUDITY: "Your post contains inappropriate or explicit content",
}

REVISION_PROMPT = "Please revise your post to maintain a positive, uplifting environment"


def describe_violations(result: ModerationResult) -> str:
    """One sentence per violated category, then a request to revise.

    Returns an empty string for a clean result.
    """
    if result.is_clean:
        return ""

    sentences = [VIOLATION_MESSAGES[v.category] for v in result.violations]
    sentences.append(REVISION_PROMPT)
    return ". ".join(sentences) + "."
