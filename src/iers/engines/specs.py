from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple


@dataclass(frozen=True)
class Field:
    """Fixed-width column: 0-based start and length, in characters (files are read latin-1)."""
    start: int
    length: int

    @property
    def stop(self) -> int:
        return self.start + self.length

    def take(self, line: str) -> str:
        return line[self.start:self.stop]


@dataclass(frozen=True)
class BulletinSource:
    """
    Static layout of one bulletin file.

    keys:        fields that place a record in time
    quantities:  per quantity, slots in preference order (final before predicted)
    first_line:  index of the first data record (header lines come before it)
    half_width:  W; windows span the 2W lines [p-W, p+W)
    """
    name: str
    layout: Literal["mjd", "ymd", "fractional_year", "leap"]
    keys: Dict[str, Field]
    quantities: Dict[str, Tuple[Field, ...]]
    half_width: int = 5
    first_line: int = 0
    valid_from_jd: Optional[float] = None
    month_rule: Optional[Literal["half", "quarter"]] = None
    notes: Dict[str, str] = field(default_factory=dict)


# ============================================================
# IERS Bulletin A/B combined series (readme.finals columns)
# ============================================================

FINALS = BulletinSource(
    name="finals.all",
    layout="mjd",
    keys={"mjd": Field(7, 8)},
    quantities={
        # Bull. B (final) first, Bull. A (rapid/predicted) as fallback.
        "x": (Field(134, 10), Field(18, 9)),
        "y": (Field(144, 10), Field(37, 9)),
        "dut1": (Field(154, 11), Field(58, 10)),
    },
    notes={"x": "arcsec", "y": "arcsec", "dut1": "s"},
)


# ============================================================
# USNO ΔT series
# ============================================================

# First JD served by deltat.data; earlier dates use the historic series.
HISTORIC_CUTOFF_JD = 2441714.5

# Monthly observed ΔT from 1973-02-01 onwards.
DELTAT_CURRENT = BulletinSource(
    name="deltat.data",
    layout="ymd",
    keys={"year": Field(1, 4), "month": Field(6, 2), "day": Field(9, 2)},
    quantities={"delta_t": (Field(13, 7),)},
    valid_from_jd=HISTORIC_CUTOFF_JD,
    notes={"delta_t": "s"},
)

# Quarterly predictions, fractional years .00/.25/.50/.75; one header line.
DELTAT_PREDICTED = BulletinSource(
    name="deltat.preds",
    layout="fractional_year",
    keys={"year": Field(1, 7)},
    quantities={"delta_t": (Field(14, 6),)},
    first_line=1,
    month_rule="quarter",
    notes={"delta_t": "s"},
)

# Biennial (half-year) historic ΔT from 1657.0; two header lines.
DELTAT_HISTORIC = BulletinSource(
    name="historic_deltat.data",
    layout="fractional_year",
    keys={"year": Field(0, 8)},
    quantities={"delta_t": (Field(13, 6),)},
    first_line=2,
    month_rule="half",
    notes={"delta_t": "s"},
)


# ============================================================
# Leap seconds (TAI-UTC)
# ============================================================

TAI_UTC = BulletinSource(
    name="tai-utc.dat",
    layout="leap",
    keys={"jd": Field(17, 9)},
    quantities={
        "offset": (Field(38, 10),),
        "base_mjd": (Field(60, 6),),
        "rate": (Field(70, 9),),
    },
    notes={"offset": "s", "rate": "s/day"},
)


ALL_SOURCES: Dict[str, BulletinSource] = {
    s.name: s for s in (FINALS, DELTAT_CURRENT, DELTAT_PREDICTED, DELTAT_HISTORIC, TAI_UTC)
}
