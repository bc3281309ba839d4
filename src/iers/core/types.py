from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

@dataclass(frozen=True)
class CalendarDate:
    year: int
    month: int
    day: int
    fraction: float = 0.0  # 0 <= fraction < 1

@dataclass(frozen=True)
class Sample:
    x: float
    y: float

@dataclass(frozen=True)
class LeapStep:
    """One row of tai-utc.dat: TAI-UTC = offset + (MJD - base_mjd) * rate from jd onwards."""
    jd: float
    offset: float
    base_mjd: float = 0.0
    rate: float = 0.0

@dataclass(frozen=True)
class OrientationValues:
    jd: float
    mjd: float
    dut1: Optional[float]
    x: Optional[float]
    y: Optional[float]
    delta_t: Optional[float]
    leap_seconds: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
