"""Configuración tipada para la normalización de títulos."""
from __future__ import annotations
from dataclasses import dataclass

@dataclass(slots=True)
class TitleConfig:
    primary_language: str = "en"     # idioma cuyas entidades van sin prefijo
    reject_marker: str = "<_nil_>"   # reemplazo que marca una regla de rechazo
    reject_empty: bool = True        # título vacío tras reescritura → rechazo
