from __future__ import annotations

"""
iers.engines.query

EarthOrientationQuery: the public numeric surface.

  dut1(t), x(t), y(t)   finals.all, Lagrange over 2W daily records
  delta_t(t)            historic / current / predicted ΔT series
  leap_seconds(t)       tai-utc.dat step function (no interpolation)
  tai_utc(t)            same step plus the pre-1972 drift term

t is a JulianMoment or a bare JD. "Not available" is None; only an
exhausted ΔT prediction series raises (NoDataAvailable).

The object holds nothing but the provider and the descriptor table; every
call opens the readers it needs and closes them before returning.
"""

import logging
import math
from typing import Mapping, Optional

from ..core.errors import NoDataAvailable
from ..core.time import Moment, as_moment
from ..core.types import OrientationValues
from ..reference.calendar import jd2cal
from .lagrange import lagrange_interp
from .leapsec import LeapSecondTable
from .locator import (
    RecordLocator,
    current_pointer,
    finals_pointer,
    historic_pointer,
    predicted_pointer,
)
from .specs import (
    ALL_SOURCES,
    DELTAT_CURRENT,
    DELTAT_HISTORIC,
    DELTAT_PREDICTED,
    FINALS,
    HISTORIC_CUTOFF_JD,
    TAI_UTC,
    BulletinSource,
)

log = logging.getLogger(__name__)


class EarthOrientationQuery:
    def __init__(self, provider, sources: Optional[Mapping[str, BulletinSource]] = None):
        self.provider = provider
        self.sources = dict(ALL_SOURCES if sources is None else sources)

    def __repr__(self) -> str:
        return f"EarthOrientationQuery({self.provider!r})"

    def _source(self, default: BulletinSource) -> BulletinSource:
        return self.sources.get(default.name, default)

    # ============================================================
    # finals.all: UT1-UTC and polar motion
    # ============================================================

    def _finals(self, t: Moment, quantity: str) -> Optional[float]:
        m = as_moment(t)
        mjd = m.mjd
        src = self._source(FINALS)
        with self.provider.open(src.name) as reader:
            loc = RecordLocator(src, reader)
            first_mjd = loc.first_key("mjd")
            if mjd < first_mjd:
                log.debug("%s: MJD %.5f before first record %.0f", src.name, mjd, first_mjd)
                return None
            index = src.first_line + int(math.floor(mjd)) - int(first_mjd)
            if index > loc.last_line:
                log.debug("%s: MJD %.5f past last record", src.name, mjd)
                return None
            p = src.first_line + finals_pointer(mjd, first_mjd)
            samples = loc.samples(p, quantity)
        if samples is None:
            return None
        return lagrange_interp(mjd, samples)

    def dut1(self, t: Moment) -> Optional[float]:
        """UT1-UTC in seconds."""
        return self._finals(t, "dut1")

    def x(self, t: Moment) -> Optional[float]:
        """Polar motion x in arcseconds."""
        return self._finals(t, "x")

    def y(self, t: Moment) -> Optional[float]:
        """Polar motion y in arcseconds."""
        return self._finals(t, "y")

    # ============================================================
    # ΔT
    # ============================================================

    def delta_t(self, t: Moment) -> Optional[float]:
        """
        ΔT = TT - UT1 in seconds.

        Before HISTORIC_CUTOFF_JD the biennial historic series is used; past
        the last record of deltat.data the quarterly predictions; the monthly
        series otherwise.
        """
        m = as_moment(t)
        jd = m.jd
        date = jd2cal(m.epoch, m.fraction)

        current = self._source(DELTAT_CURRENT)
        cutoff = current.valid_from_jd if current.valid_from_jd is not None else HISTORIC_CUTOFF_JD
        if jd < cutoff:
            return self._delta_t_historic(jd, date.year)

        with self.provider.open(current.name) as reader:
            loc = RecordLocator(current, reader)
            if jd > loc.last_jd():
                beyond = True
            else:
                beyond = False
                p = current_pointer(date.year, date.month)
                samples = None if p < 0 else loc.samples(p, "delta_t")
        if beyond:
            return self._delta_t_predicted(jd, date.year)

        log.debug("delta_t: JD %.5f -> %s", jd, current.name)
        if samples is None:
            return None
        return lagrange_interp(jd, samples)

    def _delta_t_historic(self, jd: float, year: int) -> Optional[float]:
        src = self._source(DELTAT_HISTORIC)
        p = historic_pointer(year)
        log.debug("delta_t: JD %.5f -> %s (pointer %d)", jd, src.name, p)
        if p < 0:
            return None
        with self.provider.open(src.name) as reader:
            samples = RecordLocator(src, reader).samples(p, "delta_t")
        if samples is None:
            return None
        return lagrange_interp(jd, samples)

    def _delta_t_predicted(self, jd: float, year: int) -> Optional[float]:
        src = self._source(DELTAT_PREDICTED)
        with self.provider.open(src.name) as reader:
            loc = RecordLocator(src, reader)
            last = loc.last_jd()
            if jd > last:
                raise NoDataAvailable(f"ΔT predictions end at JD {last}, requested JD {jd}")
            p = predicted_pointer(year, loc.first_key("year"))
            log.debug("delta_t: JD %.5f -> %s (pointer %d)", jd, src.name, p)
            samples = None if p < 0 else loc.samples(p, "delta_t")
        if samples is None:
            return None
        return lagrange_interp(jd, samples)

    # ============================================================
    # Leap seconds
    # ============================================================

    def leap_table(self) -> LeapSecondTable:
        src = self._source(TAI_UTC)
        with self.provider.open(src.name) as reader:
            return LeapSecondTable.from_reader(reader, src)

    def leap_seconds(self, t: Moment) -> Optional[float]:
        """TAI-UTC offset of the last table entry at or before t."""
        return self.leap_table().offset_at(as_moment(t).jd)

    def tai_utc(self, t: Moment) -> Optional[float]:
        return self.leap_table().tai_utc_at(as_moment(t).jd)

    # ============================================================
    # Everything at once
    # ============================================================

    def values(self, t: Moment) -> OrientationValues:
        m = as_moment(t)
        return OrientationValues(
            jd=m.jd,
            mjd=m.mjd,
            dut1=self.dut1(m),
            x=self.x(m),
            y=self.y(m),
            delta_t=self.delta_t(m),
            leap_seconds=self.leap_seconds(m),
        )
