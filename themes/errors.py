"""Errores fatales de una corrida de extracción."""
from __future__ import annotations


class ExtractionError(RuntimeError):
    """Base de los errores que abortan una corrida."""


class ConfigurationError(ExtractionError):
    """Falta un tema requerido o la configuración no es segura (antes de procesar registros)."""


class StructuralDesyncError(ExtractionError):
    """El contenido de un <id> no es un entero no negativo: el scanner perdió la estructura."""
