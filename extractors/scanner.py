# -*- coding: utf-8 -*-
"""
extractors/scanner.py
=====================

Scanner por bloques para volcados de Wikipedia:
stream de texto  ──►  Iterator[Fact]  (entity, hasWikipediaId, id)

No es un parser XML: solo busca hacia adelante los marcadores <title> e <id>
(sin distinguir mayúsculas), leyendo el stream en bloques. Memoria acotada por
el tamaño de bloque más el texto entre un marcador y su cierre.

Emparejamiento título → id:
- Un único hueco `pending` (entidad a la espera de su id).
- <title>: se normaliza; `pending` = resultado (None si se rechaza). Un valor
  anterior sin id se descarta en silencio.
- <id> con `pending` = None: se ignora (ids de revisión, o ids posteriores al
  primero del bloque).
- <id> con entidad pendiente: se emite el hecho y `pending` vuelve a None.
  Así solo se toma el primer id de cada bloque.
- Un <id> no numérico con entidad pendiente es fatal (StructuralDesyncError).
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, Optional, Sequence, TextIO

from themes.errors import StructuralDesyncError
from themes.schemas import Fact
from titles.normalizer import PatternNormalizer
from .config import ScanConfig

logger = logging.getLogger(__name__)

TITLE_OPEN, TITLE_CLOSE = "<title>", "</title>"
ID_OPEN, ID_CLOSE = "<id>", "</id>"
HAS_WIKIPEDIA_ID = "hasWikipediaId"

# lower() solo ASCII: conserva longitudes, los offsets del buffer y su copia coinciden
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_id_re = re.compile(r"\d+", re.ASCII)


# ---------------------------------------------------------------------------
# Lectura por marcadores
# ---------------------------------------------------------------------------

class MarkerReader:
    """Búsqueda hacia adelante de marcadores sobre un stream, sin retroceso."""

    def __init__(self, stream: TextIO, chunk_size: int = 1 << 16) -> None:
        self._stream = stream
        self._chunk_size = max(int(chunk_size), 16)
        self._buf = ""
        self._low = ""
        self._pos = 0
        self._base = 0      # caracteres descartados al compactar
        self._eof = False

    @property
    def position(self) -> int:
        """Caracteres consumidos desde el inicio del stream."""
        return self._base + self._pos

    def _fill(self) -> bool:
        """Descarta lo ya consumido y añade un bloque. False al final del stream."""
        if self._eof:
            return False
        chunk = self._stream.read(self._chunk_size)
        if not chunk:
            self._eof = True
            return False
        self._buf = self._buf[self._pos:] + chunk
        self._low = self._low[self._pos:] + chunk.translate(_ASCII_LOWER)
        self._base += self._pos
        self._pos = 0
        return True

    def find_first(self, markers: Sequence[str]) -> int:
        """
        Avanza hasta justo después del primer marcador que aparezca.
        Devuelve su índice en `markers`, o -1 si se agota el stream.
        """
        lowered = [m.translate(_ASCII_LOWER) for m in markers]
        longest = max(len(m) for m in lowered)
        while True:
            best, which = -1, -1
            for i, m in enumerate(lowered):
                at = self._low.find(m, self._pos)
                if at != -1 and (best == -1 or at < best):
                    best, which = at, i
            # un marcador más temprano podría estar partido al final del buffer
            if which != -1 and (self._eof or best + longest <= len(self._buf)):
                self._pos = best + len(lowered[which])
                return which
            if which == -1:
                self._pos = max(self._pos, len(self._buf) - longest + 1)
            if not self._fill():
                if which != -1:
                    self._pos = best + len(lowered[which])
                    return which
                self._pos = len(self._buf)
                return -1

    def read_to(self, boundary: str, max_span: Optional[int] = None) -> Optional[str]:
        """
        Lee hasta `boundary` (sin incluirlo) y lo consume.
        None si el stream termina antes de encontrarlo, o si el texto supera
        `max_span` caracteres (se descarta lo leído y se sigue desde ahí).
        """
        b = boundary.translate(_ASCII_LOWER)
        scan = self._pos
        while True:
            at = self._low.find(b, scan)
            if at != -1:
                text = self._buf[self._pos:at]
                self._pos = at + len(b)
                return text
            if max_span and len(self._buf) - self._pos > max_span:
                logger.warning("[SCAN] %s no aparece en %d caracteres (carácter %d)", boundary, max_span, self.position)
                self._pos = len(self._buf)
                return None
            shift = self._pos
            scan = max(self._pos, len(self._buf) - len(b) + 1)
            if not self._fill():
                self._pos = len(self._buf)
                return None
            scan -= shift


# ---------------------------------------------------------------------------
# Contadores de corrida
# ---------------------------------------------------------------------------

@dataclass
class ScanStats:
    titles: int = 0             # marcadores <title> leídos
    titles_rejected: int = 0    # rechazados por la normalización (o sin cerrar)
    titles_unpaired: int = 0    # aceptados que nunca recibieron id
    ids: int = 0                # marcadores <id> leídos
    ids_skipped: int = 0        # <id> sin entidad pendiente
    facts: int = 0              # hechos emitidos

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def parse_wiki_id(text: Optional[str], entity: str, position: int = -1) -> int:
    """Contenido de <id> → entero no negativo; cualquier otra cosa es desincronización."""
    if text is None:
        raise StructuralDesyncError(
            f"<id> sin cerrar (entidad pendiente {entity!r}, carácter {position})"
        )
    s = text.strip()
    if not _id_re.fullmatch(s):
        raise StructuralDesyncError(
            f"Contenido de <id> no numérico {text[:80]!r} para la entidad {entity!r} "
            f"(carácter {position})"
        )
    return int(s)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

class BlockScanner:
    """
    Empareja cada título aceptado con el primer id que le sigue.

    Secuencia perezosa, finita y solo hacia adelante: para volver a empezar
    hay que reabrir el stream y crear otro scanner.
    """

    def __init__(self, stream: TextIO, normalizer: PatternNormalizer, cfg: Optional[ScanConfig] = None) -> None:
        self.cfg = cfg or ScanConfig()
        self.normalizer = normalizer
        self.stats = ScanStats()
        self._reader = MarkerReader(stream, self.cfg.chunk_size)
        self._consumed = False

    def facts(self) -> Iterator[Fact]:
        if self._consumed:
            raise RuntimeError("BlockScanner ya fue consumido; reabre el stream para volver a escanear.")
        self._consumed = True

        stats = self.stats
        pending: Optional[str] = None

        while True:
            which = self._reader.find_first((TITLE_OPEN, ID_OPEN))
            if which == -1:
                break

            if which == 0:
                if pending is not None:
                    stats.titles_unpaired += 1
                stats.titles += 1
                raw = self._reader.read_to(TITLE_CLOSE, self.cfg.max_marker_span)
                pending = self.normalizer.normalize_raw(raw) if raw is not None else None
                if pending is None:
                    stats.titles_rejected += 1
                continue

            stats.ids += 1
            raw = self._reader.read_to(ID_CLOSE, self.cfg.max_marker_span)
            if pending is None:
                stats.ids_skipped += 1
                continue

            wiki_id = parse_wiki_id(raw, pending, self._reader.position)
            fact = Fact(subject=pending, relation=HAS_WIKIPEDIA_ID, object=wiki_id)
            pending = None
            stats.facts += 1
            if self.cfg.log_every and stats.facts % self.cfg.log_every == 0:
                logger.info("[SCAN] %d hechos (%d títulos)", stats.facts, stats.titles)
            yield fact

        if pending is not None:
            stats.titles_unpaired += 1
        logger.info(
            "[SCAN] fin: %d hechos, %d títulos (%d rechazados), %d ids ignorados",
            stats.facts, stats.titles, stats.titles_rejected, stats.ids_skipped,
        )


def scan_facts(stream: TextIO, normalizer: PatternNormalizer, cfg: Optional[ScanConfig] = None) -> Iterator[Fact]:
    """Atajo funcional: `BlockScanner(stream, normalizer, cfg).facts()`."""
    return BlockScanner(stream, normalizer, cfg).facts()
