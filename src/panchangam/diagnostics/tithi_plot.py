#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from panchangam.astro import time_scales as ts
from panchangam.config import EngineConfig
from panchangam.engines.elements import TITHI_DEG, quantities


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "panchangam[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "panchangam[diagnostics]"') from e


def elongation_samples(jd_start: float, days: float, step_hours: float, config: EngineConfig) -> Tuple[List[float], List[float]]:
    np = _need_numpy()
    jds = np.arange(jd_start, jd_start + days, step_hours / 24.0)
    elong = [quantities(float(jd), config).elongation for jd in jds]
    return [float(j) for j in jds], elong


def tithi_crossings(jds: List[float], elong: List[float]) -> List[Tuple[float, int]]:
    """(JD, tithi index entered) for each sample interval that crosses a 12 deg boundary."""
    out: List[Tuple[float, int]] = []
    for (j0, e0), (j1, e1) in zip(zip(jds, elong), zip(jds[1:], elong[1:])):
        k0, k1 = int(e0 // TITHI_DEG), int(e1 // TITHI_DEG)
        if k0 != k1:
            out.append((j1, k1))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot Moon-Sun elongation with tithi boundaries.")
    p.add_argument("--start", default=None, help="YYYY-MM-DD (default: today, UTC)")
    p.add_argument("--days", type=float, default=30.0)
    p.add_argument("--step-hours", type=float, default=1.0)
    p.add_argument("--moon-series", choices=["full", "low"], default="full")
    p.add_argument("--out", default="tithi_plot.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    start = date.fromisoformat(args.start) if args.start else datetime.now(timezone.utc).date()
    cfg = EngineConfig(moon_series=args.moon_series)
    jd0 = ts.date_to_jd(start)
    jds, elong = elongation_samples(jd0, args.days, args.step_hours, cfg)

    x = np.asarray(jds) - jd0
    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(x, elong, lw=1.0, color="0.15")
    for jd, k in tithi_crossings(jds, elong):
        ax.axvline(jd - jd0, color="0.8", lw=0.6)
        ax.text(jd - jd0, 362.0, str(k + 1), fontsize=6, ha="center")
    ax.set_xlabel(f"days from {start.isoformat()} 0h UTC")
    ax.set_ylabel("elongation (deg)")
    ax.set_ylim(0, 372)
    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
