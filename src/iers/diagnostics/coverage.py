from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..bulletins.reader import DirectoryProvider
from ..core.config import load_settings
from ..core.errors import SourceUnavailable
from ..engines.leapsec import LeapSecondTable
from ..engines.locator import RecordLocator
from ..engines.specs import ALL_SOURCES, BulletinSource
from ..reference.calendar import jd2cal


@dataclass(frozen=True)
class Coverage:
    name: str
    records: int
    first_jd: float
    last_jd: float


def source_coverage(provider, src: BulletinSource) -> Optional[Coverage]:
    """Record count and JD span of one bulletin, None when it is not stored locally."""
    try:
        reader = provider.open(src.name)
    except SourceUnavailable:
        return None
    with reader:
        if src.layout == "leap":
            steps = LeapSecondTable.from_reader(reader, src).steps
            return Coverage(src.name, len(steps), steps[0].jd, steps[-1].jd)
        loc = RecordLocator(src, reader)
        return Coverage(src.name, loc.last_line - loc.first_line + 1, loc.first_jd(), loc.last_jd())


def _ymd(jd: float) -> str:
    d = jd2cal(jd)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def format_table(rows: List[Optional[Coverage]], names: List[str]) -> str:
    out = [f"{'file':<22} {'records':>8}  {'first':<10}  {'last':<10}"]
    for name, c in zip(names, rows):
        if c is None:
            out.append(f"{name:<22} {'missing':>8}")
        else:
            out.append(f"{c.name:<22} {c.records:>8d}  {_ymd(c.first_jd):<10}  {_ymd(c.last_jd):<10}")
    return "\n".join(out)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="iers coverage", description="Show the date span of each local bulletin file.")
    p.add_argument("--data-dir", default=None, help="Bulletin directory")
    args = p.parse_args(argv)

    settings = load_settings(data_dir=Path(args.data_dir) if args.data_dir else None)
    provider = DirectoryProvider(settings.data_dir)

    names = list(ALL_SOURCES)
    rows = [source_coverage(provider, ALL_SOURCES[n]) for n in names]
    print(f"data dir: {settings.data_dir}")
    print(format_table(rows, names))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
