from __future__ import annotations
from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.errors import MalformedDataset
from ..core.time import MJD_ZERO
from ..core.types import LeapStep
from .parser import FixedWidthParser
from .specs import TAI_UTC, BulletinSource


@dataclass(frozen=True)
class LeapSecondTable:
    """
    TAI-UTC as a step function of JD.

    Lookup returns the last step whose JD does not exceed the query, so a
    query exactly on a transition JD already gets the new offset. Before
    the first step there is no value.
    """
    steps: Tuple[LeapStep, ...]

    def __post_init__(self) -> None:
        for a, b in zip(self.steps, self.steps[1:]):
            if not b.jd > a.jd:
                raise MalformedDataset(f"leap-second steps not increasing at JD {b.jd}")

    @classmethod
    def from_reader(cls, reader, source: BulletinSource = TAI_UTC) -> "LeapSecondTable":
        """Read records from source.first_line up to the first blank line."""
        parser = FixedWidthParser(source)
        steps = []
        for i in range(source.first_line, reader.line_count()):
            line = reader.line(i)
            if not line.strip():
                break
            offset = parser.value(line, "offset", i)
            if offset is None:
                raise MalformedDataset("missing TAI-UTC offset", source=source.name, line=i)
            steps.append(LeapStep(
                jd=parser.record_jd(line, i),
                offset=offset,
                base_mjd=parser.value(line, "base_mjd", i) or 0.0,
                rate=parser.value(line, "rate", i) or 0.0,
            ))
        if not steps:
            raise MalformedDataset("no leap-second records", source=source.name)
        return cls(tuple(steps))

    def __len__(self) -> int:
        return len(self.steps)

    def step_at(self, jd: float) -> Optional[LeapStep]:
        k = bisect_right([s.jd for s in self.steps], jd)
        if k == 0:
            return None
        return self.steps[k - 1]

    def offset_at(self, jd: float) -> Optional[float]:
        step = self.step_at(jd)
        return None if step is None else step.offset

    def tai_utc_at(self, jd: float) -> Optional[float]:
        """Offset plus the 1961-1971 drift term (rate is zero from 1972 on)."""
        step = self.step_at(jd)
        if step is None:
            return None
        mjd = jd - MJD_ZERO
        return step.offset + (mjd - step.base_mjd) * step.rate
