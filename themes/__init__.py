"""Temas (artefactos) de la pipeline de extracción.

Expone:
- Fact / ThemeKey / StageSpec: contratos compartidos
- ThemeRegistry / ThemeSink: lectura y escritura de temas por corrida
"""

from .schemas import Fact, ThemeKey, StageSpec
from .registry import ThemeRegistry, ThemeSink

__all__ = ["Fact", "ThemeKey", "StageSpec", "ThemeRegistry", "ThemeSink", "registry"]
