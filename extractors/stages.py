# -*- coding: utf-8 -*-
"""
extractors/stages.py
====================

Contrato de etapa como conjunto de capacidades (sin jerarquía de herencia):

    name          nombre legible de la etapa
    inputs()      temas que deben existir antes de correr
    outputs()     temas que la etapa produce
    follow_ups()  etapas a encadenar cuando esta termina

`run_stage` es un ejecutor mínimo (secuencial) para la CLI y los tests; el
orden global entre etapas lo decide el orquestador externo a partir de `spec()`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol

from themes.errors import ConfigurationError
from themes.registry import ThemeRegistry
from themes.schemas import StageSpec, ThemeKey

logger = logging.getLogger(__name__)


class Stage(Protocol):
    name: str
    registry: ThemeRegistry

    def inputs(self) -> List[ThemeKey]: ...
    def outputs(self) -> List[ThemeKey]: ...
    def follow_ups(self) -> List["Stage"]: ...
    def extract(self) -> Dict[str, Any]: ...


def describe(stage: Stage) -> StageSpec:
    """Declaración serializable de una etapa (y, recursivamente, de sus follow-ups)."""
    return StageSpec(
        name=stage.name,
        inputs=stage.inputs(),
        outputs=stage.outputs(),
        follow_ups=[describe(f) for f in stage.follow_ups()],
    )


def check_inputs(stage: Stage) -> None:
    missing = stage.registry.missing(stage.inputs())
    if missing:
        names = ", ".join(f"{k} ({stage.registry.describe(k)})" for k in missing)
        raise ConfigurationError(f"[{stage.name}] faltan temas de entrada: {names}")


def run_stage(stage: Stage) -> Dict[str, Dict[str, Any]]:
    """
    Corre una etapa y luego sus follow-ups, en ese orden.
    Devuelve {nombre_etapa: reporte}. Los errores fatales se propagan.
    """
    check_inputs(stage)
    logger.info("▶ %s", stage.name)
    reports = {stage.name: stage.extract()}
    for follow in stage.follow_ups():
        reports.update(run_stage(follow))
    return reports
