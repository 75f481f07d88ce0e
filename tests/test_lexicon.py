"""Tests for the lexicon store and lexicon files."""

import tempfile
from pathlib import Path

import pytest
import yaml

from postguard.moderation import lexicon as lexicon_module
from postguard.moderation import moderator as moderator_module
from postguard.moderation.lexicon import (
    DEFAULT_LEXICON,
    Lexicon,
    get_lexicon,
    lexicon_to_dict,
    load_lexicon,
    validate_lexicon_file,
)
from postguard.moderation.models import Category, LexiconError


def _write_yaml(data) -> str:
    """Write data to a temporary YAML file and return the path."""
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(data, f)
    f.close()
    return f.name


def test_default_lexicon_covers_every_category():
    assert list(DEFAULT_LEXICON) == list(Category)
    for category in Category:
        assert DEFAULT_LEXICON.terms(category)
    assert "damn" in DEFAULT_LEXICON[Category.PROFANITY]
    assert "kill all" in DEFAULT_LEXICON[Category.HATE_SPEECH]
    assert "god is dead" in DEFAULT_LEXICON[Category.ANTI_CHRISTIAN]
    assert "porn" in DEFAULT_LEXICON[Category.NUDITY]


def test_default_lexicon_keeps_declared_order():
    assert DEFAULT_LEXICON.terms(Category.PROFANITY)[:3] == ("fuck", "fucking", "fucked")
    assert DEFAULT_LEXICON.total_terms == sum(
        len(DEFAULT_LEXICON.terms(c)) for c in Category
    )


def test_lexicon_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_LEXICON[Category.PROFANITY] = ("x",)
    with pytest.raises(TypeError):
        DEFAULT_LEXICON._terms[Category.PROFANITY] = ("x",)


def test_lexicon_accepts_category_names():
    lex = Lexicon({"profanity": ["heck"], "nudity": ("nsfw",)})
    assert lex.terms(Category.PROFANITY) == ("heck",)
    assert lex.terms(Category.NUDITY) == ("nsfw",)
    assert lex.terms(Category.HATE_SPEECH) == ()


def test_lexicon_strips_and_deduplicates():
    lex = Lexicon({Category.PROFANITY: [" heck ", "heck", "darn"]})
    assert lex.terms(Category.PROFANITY) == ("heck", "darn")


def test_lexicon_accepts_generators():
    lex = Lexicon({Category.PROFANITY: (t for t in ["heck", "darn"])})
    assert lex.terms(Category.PROFANITY) == ("heck", "darn")


def test_lexicon_rejects_unknown_category():
    with pytest.raises(LexiconError) as exc:
        Lexicon({"blasphemy": ["x"]})
    assert any("Unknown category" in i for i in exc.value.issues)


def test_lexicon_rejects_bad_terms():
    with pytest.raises(LexiconError) as exc:
        Lexicon({Category.PROFANITY: ["ok", "", 5, "   "]})
    assert len(exc.value.issues) == 3


def test_lexicon_rejects_term_in_two_categories():
    with pytest.raises(LexiconError) as exc:
        Lexicon({Category.PROFANITY: ["Murder"], Category.HATE_SPEECH: ["murder"]})
    assert any("appears in both" in i for i in exc.value.issues)


def test_lexicon_rejects_string_instead_of_list():
    with pytest.raises(LexiconError):
        Lexicon({Category.PROFANITY: "damn"})


def test_valid_lexicon_file():
    path = _write_yaml({"lexicon": {"profanity": ["heck"], "hate_speech": ["smite all"]}})
    assert validate_lexicon_file(path) == []
    lex = load_lexicon(path)
    assert lex.terms(Category.HATE_SPEECH) == ("smite all",)
    assert lex.terms(Category.NUDITY) == ()


def test_round_trip_of_default_lexicon():
    path = _write_yaml(lexicon_to_dict(DEFAULT_LEXICON))
    lex = load_lexicon(path)
    for category in Category:
        assert lex.terms(category) == DEFAULT_LEXICON.terms(category)


def test_file_not_found():
    issues = validate_lexicon_file("/nonexistent/lexicon.yaml")
    assert any("not found" in i.lower() for i in issues)


def test_invalid_yaml():
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    f.write("{{invalid yaml::: [")
    f.close()
    issues = validate_lexicon_file(f.name)
    assert any("yaml" in i.lower() for i in issues)


def test_missing_top_level_key():
    issues = validate_lexicon_file(_write_yaml({"words": {"profanity": ["x"]}}))
    assert issues == ["Missing top-level 'lexicon' key"]


def test_empty_lexicon_mapping():
    issues = validate_lexicon_file(_write_yaml({"lexicon": {}}))
    assert any("category names" in i for i in issues)


def test_file_with_bad_category_and_terms():
    path = _write_yaml({"lexicon": {"profanity": "damn", "heresy": ["x"], "nudity": [1]}})
    issues = validate_lexicon_file(path)
    assert len(issues) == 3
    with pytest.raises(LexiconError):
        load_lexicon(path)


def test_get_lexicon_reads_environment(monkeypatch):
    path = _write_yaml({"lexicon": {"profanity": ["heck"]}})
    monkeypatch.setenv("POSTGUARD_LEXICON", path)
    get_lexicon.cache_clear()
    moderator_module.default_moderator.cache_clear()
    try:
        assert get_lexicon().terms(Category.PROFANITY) == ("heck",)
        assert get_lexicon() is get_lexicon()
        assert moderator_module.moderate_text("damn").is_clean
        assert not moderator_module.moderate_text("heck").is_clean
    finally:
        get_lexicon.cache_clear()
        moderator_module.default_moderator.cache_clear()


def test_get_lexicon_defaults_to_builtin(monkeypatch):
    monkeypatch.delenv("POSTGUARD_LEXICON", raising=False)
    get_lexicon.cache_clear()
    try:
        assert get_lexicon() is lexicon_module.DEFAULT_LEXICON
    finally:
        get_lexicon.cache_clear()


def test_directory_is_reported_not_raised():
    with tempfile.TemporaryDirectory() as tmpdir:
        issues = validate_lexicon_file(tmpdir)
        assert any("not a file" in i.lower() for i in issues)
        with pytest.raises(LexiconError):
            load_lexicon(tmpdir)


def test_non_utf8_file_is_reported_not_raised():
    f = tempfile.NamedTemporaryFile(mode="wb", suffix=".yaml", delete=False)
    f.write(b"\xff\xfe")
    f.close()
    issues = validate_lexicon_file(f.name)
    assert any("utf-8" in i.lower() for i in issues)


def test_lexicon_deduplicates_case_insensitively():
    lex = Lexicon({Category.PROFANITY: ["Heck", "heck", "HECK", "darn"]})
    assert lex.terms(Category.PROFANITY) == ("Heck", "darn")
