"""Normalización de títulos de Wikipedia (título → entidad).

Expone:
- TitleConfig: configuración tipada
- PatternList / RewriteRule: reglas de reescritura ordenadas
- PatternNormalizer: reglas + diccionarios de exclusión
"""

from .config import TitleConfig
from .rules import PatternList, RewriteRule
from .normalizer import PatternNormalizer

__all__ = ["TitleConfig", "PatternList", "RewriteRule", "PatternNormalizer"]
