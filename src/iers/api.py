from __future__ import annotations

from typing import Optional

from .core.time import JulianMoment, Moment
from .core.types import OrientationValues
from .engines.query import EarthOrientationQuery

_query: Optional[EarthOrientationQuery] = None


def set_query(q: Optional[EarthOrientationQuery]) -> None:
    """Replace the process-wide query (None rebuilds it from the environment on next use)."""
    global _query
    _query = q


def get_query() -> EarthOrientationQuery:
    if _query is None:
        from .bootstrap import build_query
        set_query(build_query())
    return _query


def dut1(t: Moment) -> Optional[float]:
    return get_query().dut1(t)


def pole_x(t: Moment) -> Optional[float]:
    return get_query().x(t)


def pole_y(t: Moment) -> Optional[float]:
    return get_query().y(t)


def delta_t(t: Moment) -> Optional[float]:
    return get_query().delta_t(t)


def leap_seconds(t: Moment) -> Optional[float]:
    return get_query().leap_seconds(t)


def tai_utc(t: Moment) -> Optional[float]:
    return get_query().tai_utc(t)


def values(t: Moment) -> OrientationValues:
    return get_query().values(t)


# ============================================================
# MJD conveniences
# ============================================================

def at_mjd(mjd: float) -> JulianMoment:
    return JulianMoment.from_mjd(mjd)
