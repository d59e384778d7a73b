import pytest

from extractors import metrics
from extractors.scanner import ScanStats
from extractors.translator import EntityTranslator, translate_facts
from themes.registry import WIKIPEDIA_IDS, WIKIPEDIA_IDS_NEEDS_TRANSLATION, ENTITY_DICTIONARY, HAS_TRANSLATION
from themes.schemas import Fact


def test_translation_rewrites_subject_only():
    facts = [
        Fact(subject="de/Paris", relation="hasWikipediaId", object=42),
        Fact(subject="de/Tisch", relation="hasWikipediaId", object=7),
    ]
    out = list(translate_facts(facts, {"de/Paris": "Paris"}))
    assert out == [
        Fact(subject="Paris", relation="hasWikipediaId", object=42),
        Fact(subject="de/Tisch", relation="hasWikipediaId", object=7),
    ]


def test_translator_stage_counters(registry):
    src = WIKIPEDIA_IDS_NEEDS_TRANSLATION.in_language("de")
    registry.write_records(src, [
        {"subject": "de/Paris", "relation": "hasWikipediaId", "object": 42},
        {"subject": "de/Tisch", "relation": "hasWikipediaId", "object": 7},
    ])
    registry.write_records(ENTITY_DICTIONARY.in_language("de"), [
        {"subject": "de/Paris", "relation": HAS_TRANSLATION, "object": "Paris"},
    ])
    stage = EntityTranslator(registry, src, WIKIPEDIA_IDS.in_language("de"))
    report = stage.extract()
    assert report["counters"] == {"facts": 2, "translated": 1, "kept": 1}
    assert [f.object for f in registry.facts(WIKIPEDIA_IDS.in_language("de"))] == [42, 7]


def test_translator_needs_language(registry):
    with pytest.raises(ValueError):
        EntityTranslator(registry, WIKIPEDIA_IDS_NEEDS_TRANSLATION, WIKIPEDIA_IDS)


def test_scan_summary_rates():
    stats = ScanStats(titles=10, titles_rejected=2, titles_unpaired=1, ids=20, ids_skipped=13, facts=7)
    summary = metrics.scan_summary(stats)
    assert summary["acceptance_rate"] == 0.8
    assert summary["pairing_rate"] == 0.875
    assert summary["facts"] == 7


def test_rates_with_no_titles():
    assert metrics.acceptance_rate({}) == 0.0
    assert metrics.pairing_rate(ScanStats()) == 0.0


def test_stats_table_one_row_per_language():
    table = metrics.stats_table({
        "de": {"titles": 4, "titles_rejected": 0, "facts": 4},
        "en": ScanStats(titles=2, titles_rejected=1, facts=1),
    })
    assert list(table["language"]) == ["de", "en"]
    assert list(table["facts"]) == [4, 1]


def test_relation_distribution():
    facts = [Fact(subject=str(i), relation="hasWikipediaId", object=i) for i in range(3)]
    assert metrics.relation_distribution(facts) == {"hasWikipediaId": 3}
