# tests/test_leapsec.py

import random

import pytest

from conftest import TAI_UTC_ROWS, make_tai_utc, tai_utc_line
from iers.bulletins.reader import MemoryBulletinReader
from iers.core.errors import MalformedDataset
from iers.core.types import LeapStep
from iers.engines.leapsec import LeapSecondTable
from iers.reference.calendar import calendar_to_jd

_MONTHS = {m: i + 1 for i, m in enumerate(
    ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"])}


@pytest.fixture
def table():
    return LeapSecondTable.from_reader(MemoryBulletinReader(make_tai_utc()))


def test_reads_every_row(table):
    assert len(table) == len(TAI_UTC_ROWS)
    assert table.steps[0] == LeapStep(2437300.5, 1.422818, 37300.0, 0.001296)
    assert table.steps[-1].offset == 37.0


def test_row_jds_match_their_calendar_dates(table):
    for (y, mon, d, *_), step in zip(TAI_UTC_ROWS, table.steps):
        assert step.jd == calendar_to_jd(y, _MONTHS[mon], d)


def test_step_property(table):
    random.seed(42)
    jds = [s.jd for s in table.steps] + [2470000.0]
    for a, b in zip(jds, jds[1:]):
        for _ in range(20):
            t1, t2 = sorted(random.uniform(a, b) for _ in range(2))
            if t2 >= b:
                continue
            assert table.offset_at(t1) == table.offset_at(t2)


def test_transition_day_takes_new_value(table):
    assert table.offset_at(2456109.5) == 35.0
    assert table.offset_at(2456109.4) == 34.0
    assert table.offset_at(2457754.5) == 37.0
    assert table.offset_at(2457754.49) == 36.0


def test_before_first_step(table):
    assert table.step_at(2437300.0) is None
    assert table.offset_at(2437300.0) is None
    assert table.tai_utc_at(2437300.0) is None


def test_drift_term_only_before_1972(table):
    # 1968 FEB 1 row: 4.2131700 + (MJD - 39126) * 0.002592
    jd = 2441000.5
    assert table.tai_utc_at(jd) == pytest.approx(4.21317 + (41000.0 - 39126.0) * 0.002592, abs=1e-9)
    assert table.tai_utc_at(2450000.5) == table.offset_at(2450000.5) == 29.0


def test_stops_at_first_blank_line():
    lines = make_tai_utc()[:5] + ["", "garbage that is never parsed"]
    t = LeapSecondTable.from_reader(MemoryBulletinReader(lines))
    assert len(t) == 5


def test_non_increasing_jd_is_malformed():
    rows = [TAI_UTC_ROWS[1], TAI_UTC_ROWS[0]]
    with pytest.raises(MalformedDataset):
        LeapSecondTable.from_reader(MemoryBulletinReader([tai_utc_line(*r) for r in rows]))
    with pytest.raises(MalformedDataset):
        LeapSecondTable((LeapStep(1.0, 1.0), LeapStep(1.0, 2.0)))


def test_empty_table_is_malformed():
    with pytest.raises(MalformedDataset):
        LeapSecondTable.from_reader(MemoryBulletinReader(["", ""]))
