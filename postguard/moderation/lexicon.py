"""Lexicon store — categorized word and phrase lists.

The built-in lists are compiled in. A YAML file with the same shape can
replace them (see ``POSTGUARD_LEXICON``)::

    lexicon:
      profanity: [damn, ...]
      hate_speech: [kill all, ...]
      anti_christian: [god is dead, ...]
      nudity: [porn, ...]

Either way the lexicon is built once per process and never mutated.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

import yaml

from postguard.moderation.models import Category, LexiconError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Built-in word lists
# ---------------------------------------------------------------------------

PROFANITY_WORDS: tuple[str, ...] = (
    "fuck", "fucking", "fucked", "fucker", "fck",
    "shit", "shitting", "bullshit", "bs",
    "ass", "asshole", "arse",
    "bitch", "bitches", "bastard",
    "damn", "dammit", "goddamn",
    "crap", "piss", "pissed",
    "dick", "cock", "pussy", "cunt",
    "whore", "slut", "hoe",
    "nigga", "nigger", "negro",
    "fag", "faggot", "retard", "retarded",
)

HATE_SPEECH_WORDS: tuple[str, ...] = (
    "kill all", "death to", "murder",
    "genocide", "ethnic cleansing",
    "supremacy", "inferior race",
    "hate all", "burn in hell",
    "terrorist", "extremist",
)

ANTI_CHRISTIAN_WORDS: tuple[str, ...] = (
    "god is dead", "jesus is fake", "christianity is a lie",
    "bible is false", "church is evil", "christians are stupid",
    "religion is poison", "faith is delusion",
    "curse god", "damn god", "hate jesus",
    "satan worship", "hail satan", "devil worship",
)

NUDITY_WORDS: tuple[str, ...] = (
    "naked", "nude", "nudity",
    "porn", "pornography", "xxx",
    "sex", "sexual", "erotic",
    "orgasm", "masturbat",
    "genitals", "breasts", "nipple",
)


class Lexicon(Mapping[Category, tuple[str, ...]]):
    """Read-only mapping of category to its ordered terms."""

    def __init__(self, terms: Mapping[Category | str, Iterable[str]]) -> None:
        terms = {
            key: list(entries) if _is_term_list(entries) else entries
            for key, entries in terms.items()
        }
        issues = _check_terms(terms)
        if issues:
            raise LexiconError(issues)

        built: dict[Category, tuple[str, ...]] = {c: () for c in Category}
        for key, entries in terms.items():
            category = Category(key) if isinstance(key, str) else key
            unique: dict[str, str] = {}
            for entry in entries:
                unique.setdefault(entry.strip().casefold(), entry.strip())
            built[category] = tuple(unique.values())
        self._terms = MappingProxyType(built)

    def __getitem__(self, category: Category) -> tuple[str, ...]:
        return self._terms[category]

    def __iter__(self) -> Iterator[Category]:
        return iter(Category)

    def __len__(self) -> int:
        return len(self._terms)

    def __repr__(self) -> str:
        counts = ", ".join(f"{c.value}={len(t)}" for c, t in self._terms.items())
        return f"Lexicon({counts})"

    def terms(self, category: Category) -> tuple[str, ...]:
        return self._terms[category]

    def categories(self) -> list[Category]:
        return list(Category)

    @property
    def total_terms(self) -> int:
        return sum(len(t) for t in self._terms.values())


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _is_term_list(entries: object) -> bool:
    return isinstance(entries, Iterable) and not isinstance(entries, (str, bytes, Mapping))


def _check_terms(terms: Mapping) -> list[str]:
    issues: list[str] = []
    owner: dict[str, str] = {}
    valid = {c.value for c in Category}

    for key, entries in terms.items():
        name = key.value if isinstance(key, Category) else key
        if name not in valid:
            issues.append(f"Unknown category '{name}'. Must be one of: {sorted(valid)}")
            continue
        if not _is_term_list(entries):
            issues.append(f"Category '{name}' must be a list of terms")
            continue

        for i, entry in enumerate(entries):
            if not isinstance(entry, str) or not entry.strip():
                issues.append(f"Category '{name}' term {i + 1} must be a non-empty string")
                continue
            folded = entry.strip().casefold()
            first = owner.setdefault(folded, name)
            if first != name:
                issues.append(f"Term '{entry.strip()}' appears in both '{first}' and '{name}'")

    return issues


def validate_lexicon_file(lexicon_path: str | Path) -> list[str]:
    """Validate a YAML lexicon file.

    Returns a list of issues found. Empty list means valid.
    """
    path = Path(lexicon_path)

    if not path.exists():
        return [f"File not found: {lexicon_path}"]
    if not path.is_file():
        return [f"Not a file: {lexicon_path}"]

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"Invalid YAML: {e}"]
    except UnicodeDecodeError as e:
        return [f"File is not valid UTF-8: {e}"]
    except OSError as e:
        return [f"Cannot read file: {e}"]

    if not isinstance(data, dict) or "lexicon" not in data:
        return ["Missing top-level 'lexicon' key"]

    lexicon = data["lexicon"]
    if not isinstance(lexicon, dict) or not lexicon:
        return ["'lexicon' must map category names to term lists"]

    return _check_terms(lexicon)


def load_lexicon(lexicon_path: str | Path) -> Lexicon:
    """Load and validate a YAML lexicon file."""
    issues = validate_lexicon_file(lexicon_path)
    if issues:
        raise LexiconError(issues)

    with open(lexicon_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    lexicon = Lexicon(data["lexicon"])
    logger.debug("Loaded lexicon from %s: %r", lexicon_path, lexicon)
    return lexicon


DEFAULT_LEXICON = Lexicon(
    {
        Category.PROFANITY: PROFANITY_WORDS,
        Category.HATE_SPEECH: HATE_SPEECH_WORDS,
        Category.ANTI_CHRISTIAN: ANTI_CHRISTIAN_WORDS,
        Category.NUDITY: NUDITY_WORDS,
    }
)


def lexicon_to_dict(lexicon: Lexicon) -> dict:
    """Serialise a lexicon into the YAML file shape."""
    return {"lexicon": {c.value: list(lexicon.terms(c)) for c in lexicon}}


@lru_cache(maxsize=1)
def get_lexicon() -> Lexicon:
    """Return the process-wide lexicon.

    Resolved once: the file named by ``POSTGUARD_LEXICON`` when set,
    otherwise the built-in lists.
    """
    from postguard.config import Settings

    settings = Settings.from_env()
    if settings.lexicon_path:
        logger.info("Using lexicon file %s", settings.lexicon_path)
        return load_lexicon(settings.lexicon_path)
    return DEFAULT_LEXICON
