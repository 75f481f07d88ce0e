"""Whole-word, case-insensitive term matching."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Sequence

# A term must not touch a word character on either side. Unlike ``\b`` this
# also holds for terms that start or end with punctuation.
_BOUNDED = r"(?<!\w){}(?!\w)"


@lru_cache(maxsize=None)
def _compile(term: str) -> re.Pattern[str]:
    return re.compile(_BOUNDED.format(re.escape(term)), re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    """True if *term* occurs in *text* as a whole word or phrase."""
    return _compile(term).search(text) is not None


def find_matches(text: str, terms: Sequence[str]) -> list[str]:
    """Return the entries of *terms* found in *text*, in *terms* order.

    Multi-word terms match only as the literal phrase with single spaces.
    """
    return [term for term in terms if contains_term(text, term)]
