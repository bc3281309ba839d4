from __future__ import annotations

"""
iers.reference.calendar

Proleptic Gregorian calendar <-> Julian Day conversions.

Both directions follow the SOFA routines iauCal2jd / iauJd2cal, so results
agree with the ERFA-based tooling that consumes the same bulletins:

  cal2jd(y, m, d)     -> (2400000.5, MJD at 0h)
  jd2cal(dj1, dj2)    -> CalendarDate(y, m, d, fraction of day)

Two-part Julian Days are accepted as is; the split between the parts is
arbitrary, only their sum matters (up to rounding).
"""

import math
from typing import Tuple

from ..core.errors import InvalidDate, OutOfRange
from ..core.time import MJD_ZERO
from ..core.types import CalendarDate

# Earliest year accepted by cal2jd (4800 BC).
IYMIN = -4799

# Julian Day range accepted by jd2cal.
DJMIN = -68569.5
DJMAX = 1e9

_MTAB = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidDate(f"month must be in 1..12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _MTAB[month - 1]


# ============================================================
# Calendar -> JD
# ============================================================

def cal2jd(year: int, month: int, day: int) -> Tuple[float, float]:
    """
    Gregorian calendar date -> two-part Julian Day at 0h.

    Returns (2400000.5, MJD). Raises InvalidDate for years before -4799,
    months outside 1..12 or days that do not exist in that month.
    """
    iy, im, iday = int(year), int(month), int(day)
    if iy < IYMIN:
        raise InvalidDate(f"year {iy} is before {IYMIN}")
    if not 1 <= im <= 12:
        raise InvalidDate(f"month must be in 1..12, got {im}")
    if not 1 <= iday <= days_in_month(iy, im):
        raise InvalidDate(f"day {iday} does not exist in {iy:04d}-{im:02d}")

    # C integer division truncates: my is -1 for Jan/Feb, else 0.
    my = int((im - 14) / 12)
    iypmy = iy + my
    djm = ((1461 * (iypmy + 4800)) // 4
           + (367 * (im - 2 - 12 * my)) // 12
           - (3 * ((iypmy + 4900) // 100)) // 4
           + iday - 2432076)
    return MJD_ZERO, float(djm)


def calendar_to_jd(year: int, month: int, day: int) -> float:
    """Single-float convenience: JD at 0h of the given date."""
    djm0, djm = cal2jd(year, month, day)
    return djm0 + djm


# ============================================================
# JD -> Calendar
# ============================================================

def jd2cal(dj1: float, dj2: float = 0.0) -> CalendarDate:
    """
    Two-part Julian Day -> Gregorian calendar date and fraction of day.

    The fraction is always normalised to 0 <= f < 1; when the fractional
    parts of dj1 and dj2 sum to a negative value the integer day moves back.
    """
    dj = dj1 + dj2
    if not (DJMIN <= dj <= DJMAX):
        raise OutOfRange(f"JD {dj} outside [{DJMIN}, {DJMAX}]")

    # Big part first, then re-align the small one to midnight.
    if abs(dj1) >= abs(dj2):
        d1, d2 = dj1, dj2
    else:
        d1, d2 = dj2, dj1
    d2 -= 0.5

    f1 = math.fmod(d1, 1.0)
    f2 = math.fmod(d2, 1.0)
    f = math.fmod(f1 + f2, 1.0)
    if f < 0.0:
        f += 1.0
    d = math.floor(d1 - f1) + math.floor(d2 - f2) + math.floor(f1 + f2 - f)
    jd = int(math.floor(d)) + 1

    # Fliegel & Van Flandern; l stays non-negative for jd >= DJMIN.
    l = jd + 68569
    n = (4 * l) // 146097
    l -= (146097 * n + 3) // 4
    i = (4000 * (l + 1)) // 1461001
    l -= (1461 * i) // 4 - 31
    k = (80 * l) // 2447
    iday = l - (2447 * k) // 80
    l = k // 11
    im = k + 2 - 12 * l
    iy = 100 * (n - 49) + i + l

    return CalendarDate(int(iy), int(im), int(iday), float(f))


def mjd_to_calendar(mjd: float) -> CalendarDate:
    return jd2cal(MJD_ZERO, mjd)
