# -*- coding: utf-8 -*-
"""
titles/utils.py
===============

Utilidades puras para títulos de Wikipedia:
- decode_title: deshace el escapado de entidades XML/HTML (&amp;, &lt;, &#233;, ...).
- entity_id:    identificador de entidad a partir del título y el idioma.
- is_primary_language: comparación de códigos de idioma tolerante a mayúsculas/región.
"""

from __future__ import annotations
import html
import re

_ws = re.compile(r"\s+")


def decode_title(raw: str) -> str:
    """Texto crudo entre <title>...</title> → título legible."""
    return html.unescape(raw)


def is_primary_language(language: str, primary_language: str) -> bool:
    """'en', 'EN' y 'en-US' cuentan como el mismo idioma principal."""
    def base(code: str) -> str:
        return (code or "").strip().lower().replace("_", "-").split("-")[0]
    return base(language) == base(primary_language)


def entity_id(title: str, language: str, primary_language: str) -> str:
    """
    Forma de URL de Wikipedia (espacios → '_').
    Idioma principal sin prefijo ("Paris"); otros con prefijo ("de/Paris").
    """
    name = _ws.sub("_", title.strip())
    if is_primary_language(language, primary_language):
        return name
    return f"{language.strip().lower()}/{name}"
