from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.errors import MalformedDataset
from ..core.time import MJD_ZERO
from ..core.types import Sample
from ..reference.calendar import cal2jd
from .specs import BulletinSource, Field


def half_year_month(fractional_year: float) -> int:
    """Historic series: whole years are January, `.5` years are June."""
    return 1 if int(fractional_year) == fractional_year else 6


def quarter_month(fractional_year: float) -> int:
    """
    Predicted series: map the quarter fraction to a month.

    The comparisons run in this order with inclusive upper bounds, so an
    exact .25/.50/.75 lands in the lower bucket (3/6/9).
    """
    frac = fractional_year - int(fractional_year)
    if frac == 0:
        return 1
    elif frac <= 0.25:
        return 3
    elif frac <= 0.5:
        return 6
    elif frac <= 0.75:
        return 9
    return 12


_MONTH_RULES = {"half": half_year_month, "quarter": quarter_month}


@dataclass(frozen=True)
class FixedWidthParser:
    source: BulletinSource

    # --------------------------------------------------------
    # Raw fields
    # --------------------------------------------------------

    def _float(self, f: Field, line: str, index: Optional[int], what: str) -> float:
        text = f.take(line).strip()
        try:
            value = float(text)
        except ValueError:
            raise MalformedDataset(
                f"cannot parse {what} from {text!r}", source=self.source.name, line=index
            ) from None
        if not math.isfinite(value):
            raise MalformedDataset(f"non-finite {what}: {text!r}", source=self.source.name, line=index)
        return value

    def key(self, line: str, name: str, index: Optional[int] = None) -> float:
        """Required numeric key field (MJD, year, month, ...)."""
        return self._float(self.source.keys[name], line, index, name)

    def value(self, line: str, quantity: str, index: Optional[int] = None) -> Optional[float]:
        """
        First non-blank slot of a quantity (final before predicted).
        None when every slot is blank.
        """
        for f in self.source.quantities[quantity]:
            if f.take(line).strip():
                return self._float(f, line, index, quantity)
        return None

    # --------------------------------------------------------
    # Record time coordinate
    # --------------------------------------------------------

    def mjd(self, line: str, index: Optional[int] = None) -> float:
        return self.key(line, "mjd", index)

    def ymd(self, line: str, index: Optional[int] = None) -> Tuple[int, int, int]:
        return (
            int(self.key(line, "year", index)),
            int(self.key(line, "month", index)),
            int(self.key(line, "day", index)),
        )

    def fractional_year(self, line: str, index: Optional[int] = None) -> float:
        return self.key(line, "year", index)

    def record_jd(self, line: str, index: Optional[int] = None) -> float:
        """JD (0h) that a record stands for, per the source layout."""
        layout = self.source.layout
        if layout == "mjd":
            return MJD_ZERO + self.mjd(line, index)
        if layout == "ymd":
            y, m, d = self.ymd(line, index)
            djm0, djm = cal2jd(y, m, d)
            return djm0 + djm
        if layout == "fractional_year":
            fy = self.fractional_year(line, index)
            month_for = _MONTH_RULES[self.source.month_rule or "half"]
            djm0, djm = cal2jd(int(fy), month_for(fy), 1)
            return djm0 + djm
        if layout == "leap":
            return self.key(line, "jd", index)
        raise ValueError(f"unknown layout {layout!r}")

    def record_x(self, line: str, index: Optional[int] = None) -> float:
        """Interpolation abscissa: MJD for finals.all, JD otherwise."""
        if self.source.layout == "mjd":
            return self.mjd(line, index)
        return self.record_jd(line, index)

    def sample(self, line: str, quantity: str, index: Optional[int] = None) -> Optional[Sample]:
        y = self.value(line, quantity, index)
        if y is None:
            return None
        return Sample(self.record_x(line, index), y)
