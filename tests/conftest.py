# tests/conftest.py
#
# Synthetic bulletin files in the published fixed-width layouts. Values are
# smooth functions of time with a few reference values planted on exact
# record dates; tai-utc.dat is the real table up to the 2017 leap second.

import math
from pathlib import Path

import pytest

from iers.bulletins.reader import DirectoryProvider
from iers.engines.query import EarthOrientationQuery
from iers.reference.calendar import mjd_to_calendar

# ------------------------------------------------------------
# finals.all
# ------------------------------------------------------------

FINALS_FIRST_MJD = 41684      # 1973-01-02
FINALS_LAST_FINAL_MJD = 50300  # Bull. B values up to here
FINALS_LAST_VALUE_MJD = 50400  # Bull. A predictions up to here
FINALS_LAST_MJD = 50420        # date-only lines up to here

FINALS_PLANTED = {
    "dut1": {43880: 0.5776},
    "x": {50116: -0.2222},
    "y": {48411: 0.5085},
}


def finals_x(mjd):
    return round(0.1 + 0.15 * math.sin(mjd / 60.0), 6)


def finals_y(mjd):
    return round(0.3 + 0.12 * math.cos(mjd / 60.0), 6)


def finals_dut1(mjd):
    return round(0.2 + 0.3 * math.sin(mjd / 50.0), 7)


def finals_value(quantity, mjd):
    planted = FINALS_PLANTED[quantity]
    if mjd in planted:
        return planted[mjd]
    return {"x": finals_x, "y": finals_y, "dut1": finals_dut1}[quantity](mjd)


def _put(buf, start, text):
    buf[start:start + len(text)] = list(text)


def finals_line(mjd, bull_a=None, bull_b=None):
    """bull_a / bull_b: (x, y, dut1) or None."""
    buf = [" "] * 185
    d = mjd_to_calendar(mjd)
    _put(buf, 0, f"{d.year % 100:2d}{d.month:2d}{d.day:2d}")
    _put(buf, 7, f"{mjd:8.2f}")
    if bull_a is not None:
        ax, ay, au = bull_a
        _put(buf, 16, "I")
        _put(buf, 18, f"{ax:9.6f}")
        _put(buf, 27, f"{0.000091:9.6f}")
        _put(buf, 37, f"{ay:9.6f}")
        _put(buf, 46, f"{0.000087:9.6f}")
        _put(buf, 57, "I")
        _put(buf, 58, f"{au:10.7f}")
        _put(buf, 68, f"{0.0000102:10.7f}")
    if bull_b is not None:
        bx, by, bu = bull_b
        _put(buf, 134, f"{bx:10.6f}")
        _put(buf, 144, f"{by:10.6f}")
        _put(buf, 154, f"{bu:11.7f}")
    return "".join(buf).rstrip()


def make_finals(first=FINALS_FIRST_MJD, last_final=FINALS_LAST_FINAL_MJD,
                last_value=FINALS_LAST_VALUE_MJD, last=FINALS_LAST_MJD):
    lines = []
    for mjd in range(first, last + 1):
        vals = tuple(finals_value(q, mjd) for q in ("x", "y", "dut1"))
        if mjd <= last_final:
            lines.append(finals_line(mjd, vals, vals))
        elif mjd <= last_value:
            lines.append(finals_line(mjd, vals, None))
        else:
            lines.append(finals_line(mjd))
    return lines


# ------------------------------------------------------------
# deltat.data: monthly, 1973-02-01 .. 2016-12-01
# ------------------------------------------------------------

DELTAT_PLANTED = {
    (1973, 2): 43.4724,
    (1994, 2): 60.0564,
    (2013, 10): 67.1717,
}


def deltat_current_value(year, month):
    if (year, month) in DELTAT_PLANTED:
        return DELTAT_PLANTED[(year, month)]
    k = (year - 1973) * 12 + month - 2
    return round(43.4724 + 0.05 * k, 4)


def make_deltat_data():
    lines = []
    for y in range(1973, 2017):
        for m in range(1, 13):
            if y == 1973 and m == 1:
                continue
            lines.append(f" {y:4d} {m:2d} {1:2d}  {deltat_current_value(y, m):7.4f}")
    return lines


# ------------------------------------------------------------
# deltat.preds: quarterly, 2015.75 .. 2025.75
# ------------------------------------------------------------

PREDS_FIRST = 2015.75
PREDS_LAST = 2025.75
PREDS_PLANTED = {2017.0: 68.60, 2021.5: 71.00}


def preds_value(fy):
    if fy in PREDS_PLANTED:
        return PREDS_PLANTED[fy]
    return round(68.0 + 0.3 * (fy - PREDS_FIRST), 2)


def make_deltat_preds():
    lines = ["    YEAR    TT-UT PREDICTION  UT1-UTC PREDICTION  ERROR"]
    k = 0
    while PREDS_FIRST + 0.25 * k <= PREDS_LAST:
        fy = PREDS_FIRST + 0.25 * k
        lines.append(f" {fy:7.2f}      {preds_value(fy):6.2f}")
        k += 1
    return lines


# ------------------------------------------------------------
# historic_deltat.data: biennial, 1657.0 .. 1984.5
# ------------------------------------------------------------

HISTORIC_PLANTED = {1905.0: 3.92}


def historic_value(fy):
    if fy in HISTORIC_PLANTED:
        return HISTORIC_PLANTED[fy]
    return round(20.0 + 25.0 * math.cos((fy - 1657.0) / 40.0), 2)


def make_historic():
    lines = [" Historic Delta T Values", "  Date     Delta T (s)   Error"]
    for k in range(0, 656):
        fy = 1657.0 + 0.5 * k
        lines.append(f"{fy:8.1f}     {historic_value(fy):6.2f}")
    return lines


# ------------------------------------------------------------
# tai-utc.dat (real content)
# ------------------------------------------------------------

TAI_UTC_ROWS = [
    (1961, "JAN", 1, 2437300.5, 1.4228180, 37300, "0.001296 "),
    (1961, "AUG", 1, 2437512.5, 1.3728180, 37300, "0.001296 "),
    (1962, "JAN", 1, 2437665.5, 1.8458580, 37665, "0.0011232"),
    (1963, "NOV", 1, 2438334.5, 1.9458580, 37665, "0.0011232"),
    (1964, "JAN", 1, 2438395.5, 3.2401300, 38761, "0.001296 "),
    (1964, "APR", 1, 2438486.5, 3.3401300, 38761, "0.001296 "),
    (1964, "SEP", 1, 2438639.5, 3.4401300, 38761, "0.001296 "),
    (1965, "JAN", 1, 2438761.5, 3.5401300, 38761, "0.001296 "),
    (1965, "MAR", 1, 2438820.5, 3.6401300, 38761, "0.001296 "),
    (1965, "JUL", 1, 2438942.5, 3.7401300, 38761, "0.001296 "),
    (1965, "SEP", 1, 2439004.5, 3.8401300, 38761, "0.001296 "),
    (1966, "JAN", 1, 2439126.5, 4.3131700, 39126, "0.002592 "),
    (1968, "FEB", 1, 2439887.5, 4.2131700, 39126, "0.002592 "),
    (1972, "JAN", 1, 2441317.5, 10.0, 41317, "0.0      "),
    (1972, "JUL", 1, 2441499.5, 11.0, 41317, "0.0      "),
    (1973, "JAN", 1, 2441683.5, 12.0, 41317, "0.0      "),
    (1974, "JAN", 1, 2442048.5, 13.0, 41317, "0.0      "),
    (1975, "JAN", 1, 2442413.5, 14.0, 41317, "0.0      "),
    (1976, "JAN", 1, 2442778.5, 15.0, 41317, "0.0      "),
    (1977, "JAN", 1, 2443144.5, 16.0, 41317, "0.0      "),
    (1978, "JAN", 1, 2443509.5, 17.0, 41317, "0.0      "),
    (1979, "JAN", 1, 2443874.5, 18.0, 41317, "0.0      "),
    (1980, "JAN", 1, 2444239.5, 19.0, 41317, "0.0      "),
    (1981, "JUL", 1, 2444786.5, 20.0, 41317, "0.0      "),
    (1982, "JUL", 1, 2445151.5, 21.0, 41317, "0.0      "),
    (1983, "JUL", 1, 2445516.5, 22.0, 41317, "0.0      "),
    (1985, "JUL", 1, 2446247.5, 23.0, 41317, "0.0      "),
    (1988, "JAN", 1, 2447161.5, 24.0, 41317, "0.0      "),
    (1990, "JAN", 1, 2447892.5, 25.0, 41317, "0.0      "),
    (1991, "JAN", 1, 2448257.5, 26.0, 41317, "0.0      "),
    (1992, "JUL", 1, 2448804.5, 27.0, 41317, "0.0      "),
    (1993, "JUL", 1, 2449169.5, 28.0, 41317, "0.0      "),
    (1994, "JUL", 1, 2449534.5, 29.0, 41317, "0.0      "),
    (1996, "JAN", 1, 2450083.5, 30.0, 41317, "0.0      "),
    (1997, "JUL", 1, 2450630.5, 31.0, 41317, "0.0      "),
    (1999, "JAN", 1, 2451179.5, 32.0, 41317, "0.0      "),
    (2006, "JAN", 1, 2453736.5, 33.0, 41317, "0.0      "),
    (2009, "JAN", 1, 2454832.5, 34.0, 41317, "0.0      "),
    (2012, "JUL", 1, 2456109.5, 35.0, 41317, "0.0      "),
    (2015, "JUL", 1, 2457204.5, 36.0, 41317, "0.0      "),
    (2017, "JAN", 1, 2457754.5, 37.0, 41317, "0.0      "),
]


def tai_utc_line(y, mon, d, jd, off, base, rate9):
    return f" {y:4d} {mon} {d:2d} =JD {jd:9.1f}  TAI-UTC={off:12.7f} S + (MJD - {base:5d}.) X {rate9}S"


def make_tai_utc():
    return [tai_utc_line(*row) for row in TAI_UTC_ROWS] + [""]


def write_lines(path, lines):
    Path(path).write_text("\n".join(lines) + "\n", encoding="latin-1")


ALL_FIXTURES = {
    "finals.all": make_finals,
    "deltat.data": make_deltat_data,
    "deltat.preds": make_deltat_preds,
    "historic_deltat.data": make_historic,
    "tai-utc.dat": make_tai_utc,
}


@pytest.fixture(scope="session")
def bulletin_dir(tmp_path_factory):
    root = tmp_path_factory.mktemp("bulletins")
    for name, make in ALL_FIXTURES.items():
        write_lines(root / name, make())
    return root


@pytest.fixture(scope="session")
def query(bulletin_dir):
    return EarthOrientationQuery(DirectoryProvider(bulletin_dir))
