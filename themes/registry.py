# -*- coding: utf-8 -*-
"""
registry.py — Catálogo de temas (artefactos) disponibles para una corrida.

El registro es un *valor* explícito: cada etapa lo recibe en su constructor.
No hay registro global a nivel de módulo, de modo que dos corridas (o dos tests)
con directorios distintos quedan completamente aisladas.

Cada tema se guarda como un archivo JSON-lines dentro de `basedir`:
    <basedir>/titlePatterns.jsonl
    <basedir>/wikipediaIds_de.jsonl

Un tema está *disponible para lectura* cuando su archivo existe.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set

from .schemas import Fact, ThemeKey

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Temas conocidos (claves base; la instancia por idioma se obtiene con in_language)
# ---------------------------------------------------------------------------

TITLE_PATTERNS = ThemeKey(name="titlePatterns")
LANGUAGE_CODE_MAPPING = ThemeKey(name="languageCodeMapping")
PREFERRED_MEANINGS = ThemeKey(name="wordnetPreferredMeanings")
TRANSITIVE_TYPE = ThemeKey(name="yagoTransitiveType")

WIKIPEDIA_IDS_NEEDS_TRANSLATION = ThemeKey(name="wikipediaIdsNeedsTranslation")
WIKIPEDIA_IDS = ThemeKey(name="wikipediaIds")
ENTITY_DICTIONARY = ThemeKey(name="entityDictionary")

DESCRIPTIONS: Dict[str, str] = {
    TITLE_PATTERNS.name: "Reglas de reescritura de títulos (relación _titleReplace)",
    LANGUAGE_CODE_MAPPING.name: "Códigos ISO 639-1 → ISO 639-3",
    PREFERRED_MEANINGS.name: "Significados preferidos de WordNet (sustantivos comunes)",
    TRANSITIVE_TYPE.name: "Tipos transitivos (lista blanca de entidades)",
    WIKIPEDIA_IDS_NEEDS_TRANSLATION.name: "Ids extraídos de artículos (por traducir)",
    WIKIPEDIA_IDS.name: "Ids extraídos de artículos de Wikipedia",
    ENTITY_DICTIONARY.name: "Diccionario entidad extranjera → entidad del idioma principal",
}

# Relaciones usadas dentro de los temas de entrada
TITLE_REPLACE = "_titleReplace"
HAS_THREE_LETTER_CODE = "hasThreeLetterLanguageCode"
IS_PREFERRED_MEANING_OF = "isPreferredMeaningOf"
HAS_TRANSLATION = "_hasTranslation"


class ThemeSink:
    """
    Destino *append-only* de un tema durante una corrida.

    Escribe un `Fact` por línea, en el orden en que se reciben. No se comparte
    entre escritores; se usa como context manager.
    """

    def __init__(self, key: ThemeKey, path: Path) -> None:
        self.key = key
        self.path = path
        self.written = 0
        self._fh = None

    def __enter__(self) -> "ThemeSink":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w", encoding="utf-8")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def write(self, fact: Fact) -> None:
        if self._fh is None:
            raise RuntimeError(f"Tema no abierto para escritura: {self.key}")
        self._fh.write(fact.model_dump_json() + "\n")
        self.written += 1

    def write_all(self, facts: Iterable[Fact]) -> int:
        for fact in facts:
            self.write(fact)
        return self.written

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.info("[THEME] %s → %s (%d facts)", self.key, self.path, self.written)


class ThemeRegistry:
    """Temas de una corrida, resueltos contra un directorio base."""

    def __init__(self, basedir: str | Path) -> None:
        self.basedir = Path(basedir)

    def path(self, key: ThemeKey) -> Path:
        return self.basedir / key.file_name

    def is_available(self, key: ThemeKey) -> bool:
        return self.path(key).is_file()

    def missing(self, keys: Iterable[ThemeKey]) -> List[ThemeKey]:
        """Subconjunto de `keys` que aún no existe (conserva el orden)."""
        return [k for k in keys if not self.is_available(k)]

    def describe(self, key: ThemeKey) -> str:
        return DESCRIPTIONS.get(key.name, key.name)

    # ----------------------------------------------------------------------
    # Lectura
    # ----------------------------------------------------------------------
    def facts(self, key: ThemeKey, relation: Optional[str] = None) -> Iterator[Fact]:
        """Itera los hechos de un tema (opcionalmente filtrados por relación)."""
        with self.path(key).open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                fact = Fact.model_validate_json(line)
                if relation is None or fact.relation == relation:
                    yield fact

    def subjects(self, key: ThemeKey) -> Set[str]:
        return {f.subject for f in self.facts(key)}

    def mapping(self, key: ThemeKey, relation: str) -> Dict[str, str]:
        """Mapa subject → object (str) para una relación; el primer hecho gana."""
        out: Dict[str, str] = {}
        for f in self.facts(key, relation):
            out.setdefault(f.subject, str(f.object))
        return out

    # ----------------------------------------------------------------------
    # Escritura
    # ----------------------------------------------------------------------
    def sink(self, key: ThemeKey) -> ThemeSink:
        return ThemeSink(key, self.path(key))

    def write_facts(self, key: ThemeKey, facts: Iterable[Fact]) -> int:
        with self.sink(key) as out:
            return out.write_all(facts)

    def write_records(self, key: ThemeKey, records: Iterable[Dict[str, object]]) -> int:
        """Atajo para sembrar temas desde dicts planos (recursos JSON)."""
        return self.write_facts(key, (Fact(**r) for r in records))


def dump_json(path: str | Path, payload: Dict[str, object]) -> None:
    """Escribe un reporte JSON legible (mismo formato que el resto de salidas)."""
    Path(path).write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


__all__ = [
    "ThemeRegistry", "ThemeSink", "dump_json",
    "TITLE_PATTERNS", "LANGUAGE_CODE_MAPPING", "PREFERRED_MEANINGS", "TRANSITIVE_TYPE",
    "WIKIPEDIA_IDS_NEEDS_TRANSLATION", "WIKIPEDIA_IDS", "ENTITY_DICTIONARY",
    "TITLE_REPLACE", "HAS_THREE_LETTER_CODE", "IS_PREFERRED_MEANING_OF", "HAS_TRANSLATION",
]
