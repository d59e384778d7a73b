# -*- coding: utf-8 -*-
"""
extractors/wiki_ids.py
======================

Etapa **WikiIdExtractor**: volcado de Wikipedia (un idioma) → hechos
`(entity, hasWikipediaId, id)`.

Declaración:
- inputs:     titlePatterns, languageCodeMapping y, en el idioma principal,
              una de las dos barreras: yagoTransitiveType si está disponible,
              si no wordnetPreferredMeanings.
- outputs:    wikipediaIds_<lang> en el idioma principal;
              wikipediaIdsNeedsTranslation_<lang> en los demás.
- follow-ups: EntityTranslator (needs translation → wikipediaIds_<lang>) solo
              para idiomas no principales.

Los errores de configuración se detectan antes de leer el primer registro.
"""

from __future__ import annotations

import bz2
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from themes.errors import ConfigurationError
from themes.registry import (
    ThemeRegistry, TITLE_PATTERNS, LANGUAGE_CODE_MAPPING, PREFERRED_MEANINGS,
    TRANSITIVE_TYPE, WIKIPEDIA_IDS, WIKIPEDIA_IDS_NEEDS_TRANSLATION, HAS_THREE_LETTER_CODE,
)
from themes.schemas import StageSpec, ThemeKey
from titles.config import TitleConfig
from titles.normalizer import PatternNormalizer
from titles.utils import is_primary_language
from .config import ScanConfig
from .scanner import BlockScanner
from .stages import describe
from .translator import EntityTranslator

logger = logging.getLogger(__name__)


def open_dump(path: str | Path, encoding: str = "utf-8") -> TextIO:
    """Abre un volcado en modo texto; `.bz2` se descomprime al vuelo."""
    p = Path(path)
    if p.suffix == ".bz2":
        return bz2.open(p, "rt", encoding=encoding)
    return p.open("r", encoding=encoding)


class WikiIdExtractor:
    """Extrae los ids de artículo de un volcado de Wikipedia."""

    def __init__(
        self,
        registry: ThemeRegistry,
        language: str,
        dump: Optional[str | Path] = None,
        title_cfg: Optional[TitleConfig] = None,
        scan_cfg: Optional[ScanConfig] = None,
    ) -> None:
        self.registry = registry
        self.language = language.strip().lower()
        self.dump = Path(dump) if dump is not None else None
        self.title_cfg = title_cfg or TitleConfig()
        self.scan_cfg = scan_cfg or ScanConfig()
        self.name = f"WikiIdExtractor[{self.language}]"

    @property
    def is_primary(self) -> bool:
        return is_primary_language(self.language, self.title_cfg.primary_language)

    # -------------------------------------------------------------------------
    # Declaración
    # -------------------------------------------------------------------------
    def inputs(self) -> List[ThemeKey]:
        keys = [TITLE_PATTERNS, LANGUAGE_CODE_MAPPING]
        if self.is_primary:
            keys.append(self.noun_source())
        return keys

    def noun_source(self) -> ThemeKey:
        """Barrera del idioma principal: la lista blanca si existe, si no los sustantivos comunes."""
        if self.registry.is_available(TRANSITIVE_TYPE):
            return TRANSITIVE_TYPE
        return PREFERRED_MEANINGS

    def output(self) -> ThemeKey:
        if self.is_primary:
            return WIKIPEDIA_IDS.in_language(self.language)
        return WIKIPEDIA_IDS_NEEDS_TRANSLATION.in_language(self.language)

    def outputs(self) -> List[ThemeKey]:
        return [self.output()]

    def follow_ups(self) -> List[EntityTranslator]:
        if self.is_primary:
            return []
        return [EntityTranslator(
            self.registry,
            WIKIPEDIA_IDS_NEEDS_TRANSLATION.in_language(self.language),
            WIKIPEDIA_IDS.in_language(self.language),
        )]

    def spec(self) -> StageSpec:
        return describe(self)

    # -------------------------------------------------------------------------
    # Ejecución
    # -------------------------------------------------------------------------
    def check_language(self) -> str:
        """El idioma debe figurar en languageCodeMapping; devuelve su código de 3 letras."""
        if not self.registry.is_available(LANGUAGE_CODE_MAPPING):
            raise ConfigurationError(f"[{self.name}] falta el tema {LANGUAGE_CODE_MAPPING}")
        codes = self.registry.mapping(LANGUAGE_CODE_MAPPING, HAS_THREE_LETTER_CODE)
        if self.language not in codes:
            raise ConfigurationError(
                f"[{self.name}] idioma desconocido {self.language!r}; "
                f"no aparece en {LANGUAGE_CODE_MAPPING}"
            )
        return codes[self.language]

    def build_normalizer(self) -> PatternNormalizer:
        return PatternNormalizer.from_registry(self.registry, self.language, self.title_cfg)

    def extract_from(self, stream: TextIO) -> Dict[str, Any]:
        """Escanea `stream` y escribe el tema de salida. Devuelve el reporte de la corrida."""
        iso3 = self.check_language()
        normalizer = self.build_normalizer()
        scanner = BlockScanner(stream, normalizer, self.scan_cfg)
        out_key = self.output()

        logger.info(
            "[WIKI-IDS] %s (%s) → %s | barrera=%s", self.language, iso3, out_key, normalizer.mode
        )
        # Una salida parcial queda escrita si la corrida aborta (sin rollback)
        with self.registry.sink(out_key) as out:
            out.write_all(scanner.facts())

        return {
            "language": self.language,
            "output": str(out_key),
            "normalizer_mode": normalizer.mode,
            "counters": scanner.stats.as_dict(),
        }

    def extract(self) -> Dict[str, Any]:
        if self.dump is None:
            raise ConfigurationError(f"[{self.name}] no se indicó el volcado de Wikipedia")
        if not self.dump.is_file():
            raise ConfigurationError(f"[{self.name}] volcado no encontrado: {self.dump}")
        with open_dump(self.dump, self.scan_cfg.encoding) as stream:
            report = self.extract_from(stream)
        report["dump"] = str(self.dump)
        return report
