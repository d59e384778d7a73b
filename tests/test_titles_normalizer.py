import pytest

from themes.errors import ConfigurationError
from themes.registry import TITLE_PATTERNS, TITLE_REPLACE, TRANSITIVE_TYPE, PREFERRED_MEANINGS, ThemeRegistry
from titles.config import TitleConfig
from titles.normalizer import PatternNormalizer
from titles.rules import PatternList


def _english(**kw):
    return PatternNormalizer(PatternList.default(), "en", **kw)


def test_common_noun_is_rejected():
    n = _english(common_nouns={"table"})
    assert n.normalize("Table") is None
    assert n.normalize("TABLE") is None
    assert n.normalize("Paris") == "Paris"


def test_primary_language_ids_are_unprefixed_and_underscored():
    n = _english(common_nouns=set())
    assert n.normalize("New York City") == "New_York_City"


def test_foreign_language_ids_are_prefixed():
    n = PatternNormalizer(PatternList.default(), "de")
    assert n.mode == "none"
    assert n.normalize("Paris") == "de/Paris"
    # sin barrera en idiomas no principales
    assert n.normalize("Tisch") == "de/Tisch"


def test_whitelist_mode():
    n = _english(entities={"Paris", "Barack_Obama"})
    assert n.mode == "whitelist"
    assert n.normalize("Barack Obama") == "Barack_Obama"
    assert n.normalize("London") is None


def test_rule_rejection_wins_before_dictionaries():
    n = _english(entities={"Category:Cities"})
    assert n.normalize("Category:Cities") is None


def test_empty_title_is_rejected():
    n = _english(common_nouns=set())
    assert n.normalize("   ") is None


def test_primary_without_gate_fails_at_construction():
    with pytest.raises(ConfigurationError):
        _english()


def test_both_gates_are_not_allowed():
    with pytest.raises(ConfigurationError):
        _english(common_nouns={"table"}, entities={"Paris"})


def test_primary_language_is_configurable():
    cfg = TitleConfig(primary_language="de")
    n = PatternNormalizer(PatternList.default(), "de", cfg, common_nouns={"tisch"})
    assert n.normalize("Tisch") is None
    assert n.normalize("Berlin") == "Berlin"


def test_normalize_raw_decodes_entities():
    n = _english(common_nouns=set())
    assert n.normalize_raw("AT&amp;T") == "AT&T"
    assert n.normalize_raw("Caf&#233; Tortoni") == "Café_Tortoni"


def test_normalization_is_pure():
    n = _english(common_nouns={"dog"})
    titles = ["Paris", "Dog", "Category:X", "Mercury (disambiguation)", "Rio de Janeiro"]
    first = [n.normalize(t) for t in titles]
    second = [n.normalize(t) for t in reversed(titles)]
    assert first == list(reversed(second))


def test_from_registry_uses_preferred_meanings(registry):
    n = PatternNormalizer.from_registry(registry, "en")
    assert n.mode == "common-nouns"
    assert n.normalize("Table") is None
    assert n.normalize("Paris") == "Paris"


def test_from_registry_prefers_whitelist(registry):
    registry.write_records(TRANSITIVE_TYPE, [
        {"subject": "Paris", "relation": "rdf:type", "object": "wordnet_city"},
    ])
    n = PatternNormalizer.from_registry(registry, "en")
    assert n.mode == "whitelist"
    assert n.normalize("Paris") == "Paris"
    assert n.normalize("Rome") is None


def test_from_registry_primary_without_gates_fails(registry):
    registry.path(PREFERRED_MEANINGS).unlink()
    with pytest.raises(ConfigurationError):
        PatternNormalizer.from_registry(registry, "en")
    # un idioma no principal no necesita barrera
    assert PatternNormalizer.from_registry(registry, "de").mode == "none"


def test_from_registry_requires_title_patterns(tmp_path):
    with pytest.raises(ConfigurationError):
        PatternNormalizer.from_registry(ThemeRegistry(tmp_path), "de")


def test_from_registry_bad_replacement_is_a_configuration_error(registry):
    registry.write_records(TITLE_PATTERNS, [{"subject": "^(X)", "relation": TITLE_REPLACE, "object": r"\2"}])
    with pytest.raises(ConfigurationError, match="titlePatterns"):
        PatternNormalizer.from_registry(registry, "de")
