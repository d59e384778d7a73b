"""Configuración tipada para la extracción de ids."""
from __future__ import annotations
from dataclasses import dataclass

@dataclass(slots=True)
class ScanConfig:
    chunk_size: int = 1 << 16     # caracteres leídos por bloque del stream
    encoding: str = "utf-8"       # codificación del volcado
    log_every: int = 100_000      # progreso cada N hechos (0 = sin progreso)
    max_marker_span: int = 1 << 20  # tope entre un marcador y su cierre (0 = sin tope)
