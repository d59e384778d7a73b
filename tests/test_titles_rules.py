import pytest

from themes.schemas import Fact
from titles.rules import PatternList, DEFAULT_TITLE_PATTERNS, LANGUAGE_CODES


def test_rules_apply_in_order():
    first = PatternList([("a", "b"), ("b", "c")])
    swapped = PatternList([("b", "c"), ("a", "b")])
    assert first.transform("a") == "c"
    assert swapped.transform("a") == "b"


def test_reject_rule_stops_pipeline():
    rules = PatternList([("^Category:", "<_nil_>"), ("Category", "X")])
    assert rules.transform("Category:Cities") is None
    # sin coincidencia la regla de rechazo no toca el título
    assert rules.transform("Cities") == "Cities"


def test_custom_reject_marker():
    rules = PatternList([("^Draft:", "NIL")], reject_marker="NIL")
    assert rules.transform("Draft:Foo") is None


def test_invalid_pattern_raises():
    with pytest.raises(ValueError):
        PatternList([("(unclosed", "")])


@pytest.mark.parametrize("pattern, replacement", [
    ("^(X)", r"\2"),
    ("^(?P<ns>X)", r"\g<name>"),
    ("^X", r"\1"),
    ("^X", r"\q"),
])
def test_invalid_replacement_raises_at_construction(pattern, replacement):
    with pytest.raises(ValueError, match="Reemplazo inválido"):
        PatternList([(pattern, replacement)])


def test_group_replacements_are_accepted():
    rules = PatternList([(r"^(\w+) \((?P<kind>\w+)\)$", r"\g<kind>_\1"), ("^(X)", "<_nil_>")])
    assert rules.transform("Mercury (planet)") == "planet_Mercury"


def test_from_facts_keeps_only_relation_and_order():
    facts = [
        Fact(subject="_", relation="_titleReplace", object=" "),
        Fact(subject="x", relation="otherRelation", object="y"),
        Fact(subject=r"\(disambiguation\)$", relation="_titleReplace", object="<_nil_>"),
    ]
    rules = PatternList.from_facts(facts, "_titleReplace")
    assert len(rules) == 2
    assert rules.transform("New_York") == "New York"
    assert rules.transform("Mercury (disambiguation)") is None


def test_default_rules():
    rules = PatternList.default()
    assert len(rules) == len(DEFAULT_TITLE_PATTERNS)
    assert rules.transform("Category:Capitals in Europe") is None
    assert rules.transform("Template talk:Infobox") is None
    assert rules.transform("Mercury (disambiguation)") is None
    assert rules.transform("List of sovereign states") is None
    assert rules.transform("  Rio_de   Janeiro ") == "Rio de Janeiro"
    assert rules.transform("1984") == "1984"


def test_language_codes_resource():
    assert LANGUAGE_CODES["en"] == "eng"
    assert LANGUAGE_CODES["de"] == "deu"
