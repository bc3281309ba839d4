from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import sys
from pathlib import Path
from typing import Optional

from .core.errors import IERSError, NoDataAvailable
from .core.time import JulianMoment


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _fmt(v: Optional[float], digits: int = 7) -> str:
    return "n/a" if v is None else f"{v:.{digits}f}"


def _moment(args: argparse.Namespace) -> JulianMoment:
    if args.mjd is not None:
        return JulianMoment.from_mjd(args.mjd)
    return JulianMoment.from_jd(args.jd)


def _query(args: argparse.Namespace):
    from .bootstrap import build_query
    from .core.config import load_settings

    return build_query(load_settings(data_dir=Path(args.data_dir) if args.data_dir else None))


# quantity subcommand -> (query method, printed digits)
_QUANTITIES = {
    "dut1": ("dut1", 7),
    "x": ("x", 6),
    "y": ("y", 6),
    "deltat": ("delta_t", 4),
    "leapsec": ("leap_seconds", 7),
    "tai-utc": ("tai_utc", 7),
}


def cmd_quantity(cmd: str, args: argparse.Namespace) -> int:
    method, digits = _QUANTITIES[cmd]
    q = _query(args)
    try:
        v = getattr(q, method)(_moment(args))
    except NoDataAvailable as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(_fmt(v, digits))
    return 0


def cmd_all(args: argparse.Namespace) -> int:
    q = _query(args)
    m = _moment(args)
    try:
        vals = q.values(m)
    except NoDataAvailable as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"JD           = {vals.jd:.6f}")
    print(f"MJD          = {vals.mjd:.6f}")
    print(f"UT1-UTC  (s) = {_fmt(vals.dut1, 7)}")
    print(f"x   (arcsec) = {_fmt(vals.x, 6)}")
    print(f"y   (arcsec) = {_fmt(vals.y, 6)}")
    print(f"ΔT       (s) = {_fmt(vals.delta_t, 4)}")
    print(f"TAI-UTC  (s) = {_fmt(vals.leap_seconds, 7)}")
    return 0


def _add_time_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--jd", type=float, help="Julian Day (UTC)")
    g.add_argument("--mjd", type=float, help="Modified Julian Day (UTC)")
    p.add_argument("--data-dir", default=None, help="Bulletin directory (default: $IERS_DATA_DIR or ~/.cache/iers)")


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="iers", description="Earth-orientation values from IERS/USNO bulletins.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # single quantities
    helps = {
        "dut1": "UT1-UTC (seconds)",
        "x": "Polar motion x (arcseconds)",
        "y": "Polar motion y (arcseconds)",
        "deltat": "ΔT = TT-UT1 (seconds)",
        "leapsec": "Accumulated leap seconds, TAI-UTC step value",
        "tai-utc": "TAI-UTC including the pre-1972 drift term",
    }
    for name, text in helps.items():
        _add_time_args(sub.add_parser(name, help=text))

    _add_time_args(sub.add_parser("all", help="Every quantity at one instant"))

    # tools
    sub.add_parser("update", help="Refresh local bulletin files from the mirrors")
    sub.add_parser("coverage", help="Show the date span of each local bulletin")
    sub.add_parser("plot-deltat", help="Plot ΔT over a range of years (needs diagnostics extras)")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "update":
        return _run_module_main("iers.bulletins.update", rest)

    if args.cmd == "coverage":
        return _run_module_main("iers.diagnostics.coverage", rest)

    if args.cmd == "plot-deltat":
        return _run_module_main("iers.diagnostics.plot_deltat", rest)

    if rest:
        p.error(f"unrecognized arguments: {' '.join(rest)}")

    try:
        if args.cmd == "all":
            return cmd_all(args)
        return cmd_quantity(args.cmd, args)
    except IERSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
