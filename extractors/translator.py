# -*- coding: utf-8 -*-
"""
extractors/translator.py
========================

Etapa de seguimiento para idiomas no principales:
tema "needs translation"  ──►  tema final

Solo reescribe el *subject* con el diccionario de entidades del idioma
(relación `_hasTranslation`: entidad extranjera → entidad del idioma principal).
La relación y el objeto (el id numérico) pasan intactos. Los subjects sin
traducción se conservan tal cual ("de/Foo").
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping

from themes.registry import ThemeRegistry, ENTITY_DICTIONARY, HAS_TRANSLATION
from themes.schemas import Fact, ThemeKey

logger = logging.getLogger(__name__)


def translate_fact(fact: Fact, dictionary: Mapping[str, str]) -> Fact:
    """Traduce el subject; el resto del hecho no cambia."""
    target = dictionary.get(fact.subject)
    if target is None or target == fact.subject:
        return fact
    return Fact(subject=target, relation=fact.relation, object=fact.object)


def translate_facts(facts: Iterable[Fact], dictionary: Mapping[str, str]) -> Iterator[Fact]:
    for fact in facts:
        yield translate_fact(fact, dictionary)


class EntityTranslator:
    """Traduce los subjects de `source` y escribe `target`."""

    def __init__(self, registry: ThemeRegistry, source: ThemeKey, target: ThemeKey) -> None:
        if not source.language:
            raise ValueError(f"El tema a traducir debe tener idioma: {source}")
        self.registry = registry
        self.source = source
        self.target = target
        self.language = source.language
        self.name = f"EntityTranslator[{source} → {target}]"

    def dictionary_key(self) -> ThemeKey:
        return ENTITY_DICTIONARY.in_language(self.language)

    def inputs(self) -> List[ThemeKey]:
        return [self.source, self.dictionary_key()]

    def outputs(self) -> List[ThemeKey]:
        return [self.target]

    def follow_ups(self) -> List[Any]:
        return []

    def extract(self) -> Dict[str, Any]:
        dictionary = self.registry.mapping(self.dictionary_key(), HAS_TRANSLATION)
        counters = {"facts": 0, "translated": 0, "kept": 0}

        with self.registry.sink(self.target) as out:
            for fact in self.registry.facts(self.source):
                translated = translate_fact(fact, dictionary)
                out.write(translated)
                counters["facts"] += 1
                if translated is not fact:
                    counters["translated"] += 1
                else:
                    counters["kept"] += 1

        logger.info(
            "[TRANSLATE] %s: %d hechos (%d traducidos, %d sin traducción)",
            self.source, counters["facts"], counters["translated"], counters["kept"],
        )
        return {"source": str(self.source), "target": str(self.target), "counters": counters}
