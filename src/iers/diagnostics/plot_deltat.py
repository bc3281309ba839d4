from __future__ import annotations

import argparse
from pathlib import Path

from ..bootstrap import build_query
from ..core.config import load_settings
from ..core.errors import NoDataAvailable
from ..reference.calendar import calendar_to_jd


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "iers-bulletins[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "iers-bulletins[diagnostics]"') from e


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="iers plot-deltat", description="Plot Delta T (TT-UT1) interpolated from local bulletins.")
    p.add_argument("--y0", type=int, default=1800, help="start year")
    p.add_argument("--y1", type=int, default=2030, help="end year")
    p.add_argument("--step", type=float, default=30.0, help="sampling step in days")
    p.add_argument("--out", default="deltat.png", help="output image filename")
    p.add_argument("--data-dir", default=None, help="Bulletin directory")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")
    if args.step <= 0:
        raise SystemExit("--step must be positive")

    np = _need_numpy()
    plt = _need_matplotlib()

    q = build_query(load_settings(data_dir=Path(args.data_dir) if args.data_dir else None))

    jd0 = calendar_to_jd(args.y0, 1, 1)
    jd1 = calendar_to_jd(args.y1, 1, 1)
    jds = np.arange(jd0, jd1 + 1e-9, float(args.step), dtype=float)

    xs, ys = [], []
    for jd in jds:
        try:
            v = q.delta_t(float(jd))
        except NoDataAvailable:
            break
        if v is None:
            continue
        xs.append(2000.0 + (float(jd) - 2451545.0) / 365.25)
        ys.append(v)

    if not xs:
        print("No ΔT values in the requested range.")
        return 1

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(np.array(xs), np.array(ys), linewidth=1.5, label="Lagrange (bulletins)")
    ax.set_title("Delta T = TT − UT1 (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("ΔT (s)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}  ({len(xs)} points)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
