from __future__ import annotations
from dataclasses import dataclass
import math
import time
from typing import Union

MJD_ZERO = 2400000.5          # JD of MJD 0.0
_JD_UNIX_EPOCH = 2440587.5    # JD at 1970-01-01 00:00:00 UTC


@dataclass(frozen=True)
class JulianMoment:
    """
    A Julian Day held as two parts, epoch + fraction.

    Either part may carry the bulk of the date; the split only matters for
    precision. from_mjd() keeps the MJD exact by storing MJD_ZERO as epoch.
    """
    epoch: float
    fraction: float = 0.0

    @classmethod
    def from_jd(cls, jd: float) -> "JulianMoment":
        return cls(float(jd), 0.0)

    @classmethod
    def from_mjd(cls, mjd: float) -> "JulianMoment":
        return cls(MJD_ZERO, float(mjd))

    @classmethod
    def from_calendar(cls, year: int, month: int, day: int, fraction: float = 0.0) -> "JulianMoment":
        from ..reference.calendar import cal2jd

        djm0, djm = cal2jd(year, month, day)
        return cls(djm0, djm + fraction)

    @classmethod
    def now(cls) -> "JulianMoment":
        return cls(_JD_UNIX_EPOCH, time.time() / 86400.0)

    @property
    def jd(self) -> float:
        return self.epoch + self.fraction

    @property
    def mjd(self) -> float:
        return (self.epoch - MJD_ZERO) + self.fraction

    def __str__(self) -> str:
        return f"JD {self.jd:.6f} (MJD {self.mjd:.6f})"


Moment = Union[JulianMoment, float, int]


def as_moment(t: Moment) -> JulianMoment:
    """Accept a JulianMoment or a bare Julian Day number."""
    if isinstance(t, JulianMoment):
        return t
    if isinstance(t, bool) or not isinstance(t, (int, float)):
        raise TypeError(f"expected JulianMoment or JD number, got {type(t).__name__}")
    if not math.isfinite(t):
        raise ValueError(f"JD must be finite, got {t!r}")
    return JulianMoment.from_jd(float(t))
