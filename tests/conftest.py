import pytest

from themes.registry import (
    ThemeRegistry, TITLE_PATTERNS, LANGUAGE_CODE_MAPPING, PREFERRED_MEANINGS,
    TITLE_REPLACE, HAS_THREE_LETTER_CODE, IS_PREFERRED_MEANING_OF,
)
from titles.rules import DEFAULT_TITLE_PATTERNS


@pytest.fixture
def registry(tmp_path):
    """Temas mínimos: patrones por defecto, códigos en/de y dos sustantivos comunes."""
    reg = ThemeRegistry(tmp_path / "themes")
    reg.write_records(TITLE_PATTERNS, [
        {"subject": r["pattern"], "relation": TITLE_REPLACE, "object": r["replacement"]}
        for r in DEFAULT_TITLE_PATTERNS
    ])
    reg.write_records(LANGUAGE_CODE_MAPPING, [
        {"subject": "en", "relation": HAS_THREE_LETTER_CODE, "object": "eng"},
        {"subject": "de", "relation": HAS_THREE_LETTER_CODE, "object": "deu"},
    ])
    reg.write_records(PREFERRED_MEANINGS, [
        {"subject": "wordnet_table_104379243", "relation": IS_PREFERRED_MEANING_OF, "object": "table"},
        {"subject": "wordnet_dog_102084071", "relation": IS_PREFERRED_MEANING_OF, "object": "dog"},
    ])
    return reg
