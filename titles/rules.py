# -*- coding: utf-8 -*-
"""
titles/rules.py
===============

Reglas de reescritura de títulos.

Una regla es un par ordenado (patrón, reemplazo). Si el reemplazo es el marcador
de rechazo (`<_nil_>` por defecto) y el patrón encuentra coincidencia, el título
completo se rechaza. En otro caso se aplica `re.sub` sobre el título.

El orden importa: la lista se congela (tupla) al construirse y no se modifica.

Recursos embebidos (`titles/resources`):
- title_patterns.json : reglas por defecto, en el orden en que se aplican
- language_codes.json : ISO 639-1 → ISO 639-3
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from importlib.resources import files
from typing import Iterable, List, Optional, Pattern, Tuple

from themes.schemas import Fact

DEFAULT_REJECT = "<_nil_>"


def load_json_resource(path: str) -> list | dict:
    """Carga un JSON embebido en `titles/resources`."""
    return json.loads(files("titles.resources").joinpath(path).read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class RewriteRule:
    pattern: Pattern[str]
    replacement: str
    rejects: bool = False

    def apply(self, title: str) -> Optional[str]:
        """Devuelve el título reescrito, o None si la regla lo rechaza."""
        if self.rejects:
            return None if self.pattern.search(title) else title
        return self.pattern.sub(self.replacement, title)


def _check_template(rx: Pattern[str], pattern: str, replacement: str) -> None:
    """
    Valida el reemplazo contra los grupos del patrón sin esperar a un título:
    una regex vacía con los mismos grupos (y nombres) siempre coincide con "".
    """
    names = {idx: name for name, idx in rx.groupindex.items()}
    shape = "".join(f"(?P<{names[i]}>)" if i in names else "()" for i in range(1, rx.groups + 1))
    try:
        re.compile(shape).sub(replacement, "")
    except (re.error, IndexError) as e:
        raise ValueError(f"Reemplazo inválido {replacement!r} para el patrón {pattern!r}: {e}") from e


class PatternList:
    """Lista ordenada e inmutable de reglas de reescritura."""

    def __init__(self, rules: Iterable[Tuple[str, str]], reject_marker: str = DEFAULT_REJECT) -> None:
        compiled: List[RewriteRule] = []
        for pattern, replacement in rules:
            try:
                rx = re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Patrón de título inválido {pattern!r}: {e}") from e
            rejects = replacement == reject_marker
            if not rejects:
                _check_template(rx, pattern, replacement)
            compiled.append(RewriteRule(rx, replacement, rejects=rejects))
        self.rules: Tuple[RewriteRule, ...] = tuple(compiled)

    @classmethod
    def from_facts(cls, facts: Iterable[Fact], relation: str, reject_marker: str = DEFAULT_REJECT) -> "PatternList":
        """Construye la lista desde hechos (subject=patrón, object=reemplazo) de una relación."""
        return cls(
            ((f.subject, str(f.object)) for f in facts if f.relation == relation),
            reject_marker=reject_marker,
        )

    @classmethod
    def default(cls, reject_marker: str = DEFAULT_REJECT) -> "PatternList":
        return cls(((r["pattern"], r["replacement"]) for r in DEFAULT_TITLE_PATTERNS), reject_marker)

    def transform(self, title: str) -> Optional[str]:
        """Aplica las reglas en orden; corta en la primera que rechaza."""
        for rule in self.rules:
            title = rule.apply(title)
            if title is None:
                return None
        return title

    def __len__(self) -> int:
        return len(self.rules)


# Reglas por defecto (sembradas en el tema titlePatterns con `init-themes`)
DEFAULT_TITLE_PATTERNS: list[dict] = load_json_resource("title_patterns.json")

# ISO 639-1 → ISO 639-3 (sembrado en el tema languageCodeMapping)
LANGUAGE_CODES: dict[str, str] = load_json_resource("language_codes.json")
