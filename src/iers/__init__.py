"""iers public API.

Earth-orientation quantities (UT1-UTC, polar motion, ΔT, TAI-UTC) interpolated
from IERS/USNO bulletin files. Module-level functions use a query built from
the environment on first use; see iers.api.set_query to supply your own.
"""

from .api import (
    at_mjd,
    delta_t,
    dut1,
    get_query,
    leap_seconds,
    pole_x,
    pole_y,
    set_query,
    tai_utc,
    values,
)
from .core.errors import (
    IERSError,
    InvalidDate,
    MalformedDataset,
    NoDataAvailable,
    OutOfRange,
    RetrievalError,
    SourceUnavailable,
)
from .core.time import JulianMoment
from .engines.query import EarthOrientationQuery

__version__ = "0.1.0"

__all__ = [
    "at_mjd",
    "delta_t",
    "dut1",
    "get_query",
    "leap_seconds",
    "pole_x",
    "pole_y",
    "set_query",
    "tai_utc",
    "values",
    "EarthOrientationQuery",
    "JulianMoment",
    "IERSError",
    "InvalidDate",
    "MalformedDataset",
    "NoDataAvailable",
    "OutOfRange",
    "RetrievalError",
    "SourceUnavailable",
]
