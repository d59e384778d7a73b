# -*- coding: utf-8 -*-
"""
extractors/metrics.py
=====================

Métricas de corridas de extracción de ids.
Módulo **puro**: no escribe archivos ni imprime; solo calcula.

KPIs:
- acceptance_rate:   títulos aceptados / títulos leídos.
- pairing_rate:      hechos / títulos aceptados (bloques aceptados con id).
- scan_summary:      contadores + tasas listos para el reporte JSON.
- relation_distribution: conteo por relación (auditoría de temas).
- stats_table:       DataFrame con una fila por corrida (idioma).

Se aceptan `ScanStats` o el dict de `as_dict()` indistintamente.
"""

from __future__ import annotations
from collections import Counter
from typing import Any, Dict, Iterable, Mapping

import pandas as pd

from themes.schemas import Fact


def _to_dict(stats: Any) -> Dict[str, int]:
    if hasattr(stats, "as_dict"):
        return stats.as_dict()
    if isinstance(stats, Mapping):
        return dict(stats)
    raise TypeError("stats debe ser ScanStats o dict.")


def acceptance_rate(stats: Any) -> float:
    d = _to_dict(stats)
    titles = int(d.get("titles", 0))
    accepted = titles - int(d.get("titles_rejected", 0))
    return round(accepted / titles, 4) if titles else 0.0


def pairing_rate(stats: Any) -> float:
    d = _to_dict(stats)
    accepted = int(d.get("titles", 0)) - int(d.get("titles_rejected", 0))
    return round(int(d.get("facts", 0)) / accepted, 4) if accepted else 0.0


def scan_summary(stats: Any) -> Dict[str, Any]:
    d = _to_dict(stats)
    return {
        **d,
        "acceptance_rate": acceptance_rate(d),
        "pairing_rate": pairing_rate(d),
    }


def relation_distribution(facts: Iterable[Fact], top_k: int = 20) -> Dict[str, int]:
    c = Counter(f.relation for f in facts)
    return dict(c.most_common(top_k))


def stats_table(runs: Mapping[str, Any]) -> pd.DataFrame:
    """Resumen tabular {idioma: stats} → una fila por idioma."""
    rows = []
    for language, stats in runs.items():
        rows.append({"language": language, **scan_summary(stats)})
    if not rows:
        return pd.DataFrame(columns=["language"])
    return pd.DataFrame(rows).sort_values(by="language").reset_index(drop=True)
