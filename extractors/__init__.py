"""Etapas de extracción sobre volcados de Wikipedia.

Expone:
- ScanConfig: configuración tipada del scanner
- BlockScanner / ScanStats: emparejamiento título → primer id
- WikiIdExtractor: etapa (inputs/outputs/follow-ups + extract)
- EntityTranslator: follow-up para idiomas no principales
- run_stage: ejecutor secuencial de una etapa y sus follow-ups
"""

from .config import ScanConfig
from .scanner import BlockScanner, ScanStats, HAS_WIKIPEDIA_ID
from .stages import run_stage, describe
from .translator import EntityTranslator
from .wiki_ids import WikiIdExtractor

__all__ = [
    "ScanConfig", "BlockScanner", "ScanStats", "HAS_WIKIPEDIA_ID",
    "run_stage", "describe", "EntityTranslator", "WikiIdExtractor", "metrics",
]
