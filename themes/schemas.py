# -*- coding: utf-8 -*-
"""
themes/schemas.py
=================

Contratos Pydantic v2 compartidos por todas las etapas de extracción.

Diseño:
- `Fact`:      triple inmutable (subject, relation, object). El objeto puede ser
               un entero (ids numéricos) o un string (patrones, palabras, entidades).
- `ThemeKey`:  clave de artefacto = (nombre base, idioma). Un mismo artefacto lógico
               tiene una instancia por idioma; no hay variantes por subclase.
- `StageSpec`: declaración de una etapa como conjunto de capacidades
               (inputs, outputs, follow-ups). El orquestador externo resuelve el grafo.

Ejemplo de línea JSON de un tema (wikipediaIds_de.jsonl):
---------------------------------------------------------
{"subject": "de/Paris", "relation": "hasWikipediaId", "object": 42}
"""

from __future__ import annotations

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Fact(BaseModel):
    """Triple (S, R, O). Se crea una vez y nunca se muta."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    subject: str
    relation: str
    object: Union[StrictInt, str]


class ThemeKey(BaseModel):
    """
    Clave de un artefacto (tema).

    - name:     nombre base, p. ej. "wikipediaIds".
    - language: código de idioma para temas multilingües; None si el tema es único.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    language: Optional[str] = None

    def in_language(self, language: str) -> "ThemeKey":
        """Instancia del tema para un idioma concreto."""
        return ThemeKey(name=self.name, language=language)

    @property
    def file_name(self) -> str:
        if self.language:
            return f"{self.name}_{self.language}.jsonl"
        return f"{self.name}.jsonl"

    def __str__(self) -> str:
        return self.file_name[: -len(".jsonl")]


class StageSpec(BaseModel):
    """Declaración de una etapa: qué lee, qué produce y qué etapas encadena."""
    model_config = ConfigDict(frozen=True)

    name: str
    inputs: List[ThemeKey] = Field(default_factory=list)
    outputs: List[ThemeKey] = Field(default_factory=list)
    follow_ups: List["StageSpec"] = Field(default_factory=list)


StageSpec.model_rebuild()


__all__ = ["Fact", "ThemeKey", "StageSpec"]
