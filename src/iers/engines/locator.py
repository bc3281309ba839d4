from __future__ import annotations

"""
iers.engines.locator

Map a query time to a line index in a bulletin file and build the
interpolation window around it.

Pointer formulas (0-based raw line index p):

  finals.all            p = floor(MJD) - firstMJD - 1
  deltat.data           p = (year - 1973)*12 + month - 2
  deltat.preds          p = (year - int(fy0))*4 + q0 - 2,  q0 = frac(fy0)*4
  historic_deltat.data  p = (year - 1657)*2 + 2

Every pointer is clamped so that the half-open window [p-W, p+W) lies
inside [first_line, last_line]. Near the file edges the window is therefore
off-centre; values there are extrapolated from the nearest 2W records.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from ..core.errors import MalformedDataset
from ..core.types import Sample
from .parser import FixedWidthParser
from .specs import BulletinSource

log = logging.getLogger(__name__)

CURRENT_EPOCH_YEAR = 1973
HISTORIC_EPOCH_YEAR = 1657


# ============================================================
# Pointer formulas
# ============================================================

def finals_pointer(mjd: float, first_mjd: float) -> int:
    return int(math.floor(mjd)) - int(first_mjd) - 1


def current_pointer(year: int, month: int) -> int:
    return (year - CURRENT_EPOCH_YEAR) * 12 + month - 2


def predicted_pointer(year: int, first_fractional_year: float) -> int:
    y0 = int(first_fractional_year)
    q0 = int(round((first_fractional_year - y0) * 4))
    return (year - y0) * 4 + q0 - 2


def historic_pointer(year: int) -> int:
    return (year - HISTORIC_EPOCH_YEAR) * 2 + 2


def clamp(p: int, half_width: int, first_line: int, last_line: int) -> int:
    """
    Shift p so that [p-W, p+W) fits inside [first_line, last_line].

    Raises MalformedDataset when the file holds fewer than 2W records.
    """
    if last_line - first_line + 1 < 2 * half_width:
        raise MalformedDataset(
            f"{last_line - first_line + 1} records, window needs {2 * half_width}"
        )
    if p - half_width < first_line:
        p = first_line + half_width
    if p + half_width > last_line + 1:
        p = last_line + 1 - half_width
    return p


# ============================================================
# Window construction
# ============================================================

@dataclass(frozen=True)
class RecordLocator:
    """
    Window builder over one open reader.

    The reader must offer line(i), line_count() and last_record_line();
    every line access is an explicit index, no cursor state is kept.
    """
    source: BulletinSource
    reader: object

    @property
    def parser(self) -> FixedWidthParser:
        return FixedWidthParser(self.source)

    @property
    def first_line(self) -> int:
        return self.source.first_line

    @property
    def last_line(self) -> int:
        return self.reader.last_record_line()

    def line(self, index: int) -> str:
        return self.reader.line(index)

    def window(self, p: int) -> range:
        w = self.source.half_width
        p = clamp(p, w, self.first_line, self.last_line)
        return range(p - w, p + w)

    def samples(self, p: int, quantity: str) -> Optional[List[Sample]]:
        """
        The 2W samples around pointer p, or None when any record in the
        window has no value for the quantity.
        """
        rows = self.window(p)
        parser = self.parser
        out: List[Sample] = []
        for i in rows:
            s = parser.sample(self.line(i), quantity, i)
            if s is None:
                log.debug("%s: no %s at line %d", self.source.name, quantity, i)
                return None
            out.append(s)
        log.debug(
            "%s: pointer %d -> window [%d, %d) for %s",
            self.source.name, p, rows.start, rows.stop, quantity,
        )
        return out

    # --------------------------------------------------------
    # Record keys at the file edges
    # --------------------------------------------------------

    def first_key(self, name: str) -> float:
        i = self.first_line
        return self.parser.key(self.line(i), name, i)

    def last_jd(self) -> float:
        i = self.last_line
        return self.parser.record_jd(self.line(i), i)

    def first_jd(self) -> float:
        i = self.first_line
        return self.parser.record_jd(self.line(i), i)
