# -*- coding: utf-8 -*-
"""
titles/normalizer.py
====================

Normalización de títulos de Wikipedia:
raw title (str)  ──►  entity id (str) | None (rechazado)

Pasos, en orden (el primero que rechaza corta el flujo):
1) Reglas de reescritura (PatternList). Una regla puede transformar o rechazar
   (namespaces como "Category:", páginas de desambiguación, listas, ...).
2) Diccionario de sustantivos comunes: si `title.lower()` pertenece → rechazo.
   Evita que artículos como "Table" se conviertan en entidades.
3) Identificador candidato: sin prefijo en el idioma principal, "<lang>/..." en otro caso.
4) Lista blanca de entidades (solo idioma principal, si hay un conjunto autoritativo):
   el candidato debe pertenecer.
5) Aceptar.

Notas:
- Todo el estado (reglas + diccionarios) es de solo lectura tras construir:
  tuple/frozenset. Varios scanners pueden compartir la misma instancia.
- En el idioma principal hace falta al menos una de las dos barreras
  (sustantivos comunes o lista blanca); sin ninguna, construir falla.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Optional

from themes.errors import ConfigurationError
from themes.registry import (
    ThemeRegistry, TITLE_PATTERNS, PREFERRED_MEANINGS, TRANSITIVE_TYPE,
    TITLE_REPLACE, IS_PREFERRED_MEANING_OF,
)
from .config import TitleConfig
from .rules import PatternList
from .utils import decode_title, entity_id, is_primary_language

logger = logging.getLogger(__name__)


class PatternNormalizer:
    """Decide si un título de Wikipedia denota una entidad, y cuál."""

    def __init__(
        self,
        patterns: PatternList,
        language: str,
        cfg: Optional[TitleConfig] = None,
        common_nouns: Optional[Iterable[str]] = None,
        entities: Optional[Iterable[str]] = None,
    ) -> None:
        self.cfg = cfg or TitleConfig()
        self.language = language
        self.patterns = patterns
        self.is_primary = is_primary_language(language, self.cfg.primary_language)

        if common_nouns is not None and entities is not None:
            raise ConfigurationError(
                "El normalizador admite una sola barrera: sustantivos comunes o lista blanca, no ambas."
            )
        if self.is_primary and common_nouns is None and entities is None:
            raise ConfigurationError(
                f"El normalizador del idioma principal ({language}) necesita los sustantivos comunes "
                f"({PREFERRED_MEANINGS.name}) o la lista blanca de entidades ({TRANSITIVE_TYPE.name}). "
                "Sin ellos, artículos de sustantivos comunes (p. ej. 'table') se volverían entidades."
            )

        self.common_nouns: Optional[FrozenSet[str]] = (
            frozenset(w.lower() for w in common_nouns) if common_nouns is not None else None
        )
        self.entities: Optional[FrozenSet[str]] = frozenset(entities) if entities is not None else None

    # -------------------------------------------------------------------------
    # Construcción desde temas
    # -------------------------------------------------------------------------
    @classmethod
    def from_registry(cls, registry: ThemeRegistry, language: str, cfg: Optional[TitleConfig] = None) -> "PatternNormalizer":
        """
        Cablea el normalizador con los temas disponibles:
        - titlePatterns es obligatorio.
        - Idioma principal: lista blanca (yagoTransitiveType) si existe;
          si no, sustantivos comunes (wordnetPreferredMeanings); si no, error.
        - Otros idiomas: sin diccionario.
        """
        cfg = cfg or TitleConfig()
        if not registry.is_available(TITLE_PATTERNS):
            raise ConfigurationError(f"La normalización de títulos necesita el tema {TITLE_PATTERNS} como entrada.")
        try:
            patterns = PatternList.from_facts(
                registry.facts(TITLE_PATTERNS), TITLE_REPLACE, reject_marker=cfg.reject_marker
            )
        except ValueError as e:
            raise ConfigurationError(f"Tema {TITLE_PATTERNS} inválido: {e}") from e

        common_nouns = entities = None
        if is_primary_language(language, cfg.primary_language):
            if registry.is_available(TRANSITIVE_TYPE):
                entities = registry.subjects(TRANSITIVE_TYPE)
                logger.info("[TITLES] lista blanca: %d entidades", len(entities))
            elif registry.is_available(PREFERRED_MEANINGS):
                common_nouns = {str(f.object) for f in registry.facts(PREFERRED_MEANINGS, IS_PREFERRED_MEANING_OF)}
                logger.info("[TITLES] sustantivos comunes: %d palabras", len(common_nouns))
        return cls(patterns, language, cfg, common_nouns=common_nouns, entities=entities)

    # -------------------------------------------------------------------------
    # API principal
    # -------------------------------------------------------------------------
    def normalize(self, title: str) -> Optional[str]:
        """Título ya decodificado → id de entidad, o None si se rechaza."""
        rewritten = self.patterns.transform(title)
        if rewritten is None:
            logger.debug("[TITLES] rechazado por regla: %r", title)
            return None
        if self.cfg.reject_empty and not rewritten.strip():
            return None
        if self.common_nouns is not None and rewritten.lower() in self.common_nouns:
            logger.debug("[TITLES] sustantivo común: %r", rewritten)
            return None

        candidate = entity_id(rewritten, self.language, self.cfg.primary_language)
        if self.entities is not None and candidate not in self.entities:
            logger.debug("[TITLES] fuera de la lista blanca: %r", candidate)
            return None
        return candidate

    def normalize_raw(self, raw: str) -> Optional[str]:
        """Igual que `normalize`, pero sobre el texto crudo entre <title> y </title>."""
        return self.normalize(decode_title(raw))

    @property
    def mode(self) -> str:
        if self.entities is not None:
            return "whitelist"
        if self.common_nouns is not None:
            return "common-nouns"
        return "none"
