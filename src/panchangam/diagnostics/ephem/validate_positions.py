#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional

from panchangam.astro import positions as pos
from panchangam.astro.args import wrap180


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "panchangam[ephemeris]"') from e


def _need_skyfield():
    try:
        from skyfield.api import load
        return load
    except ImportError as e:
        raise RuntimeError('Need skyfield. Install: pip install "panchangam[ephemeris]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "panchangam[diagnostics]"') from e


@dataclass(frozen=True)
class Residuals:
    """Series minus ephemeris, arcseconds."""
    body: str
    rms: float
    max_abs: float


def residuals(jds_tt, series: str = "full", kernel: str = "de421.bsp") -> List[Residuals]:
    np = _need_numpy()
    load = _need_skyfield()

    eph = load(kernel)
    earth, sun, moon = eph["earth"], eph["sun"], eph["moon"]
    t = load.timescale().tt_jd(np.asarray(jds_tt, dtype=float))

    out = []
    for name, target, ours in (
        ("sun", sun, lambda jd: pos.sun_longitude(jd)),
        ("moon", moon, lambda jd: pos.moon_longitude(jd, series)),
    ):
        _, lon, _ = earth.at(t).observe(target).apparent().ecliptic_latlon(epoch="date")
        ref = lon.degrees
        d = np.array([wrap180(ours(float(jd)) - float(r)) for jd, r in zip(jds_tt, ref)]) * 3600.0
        out.append(Residuals(body=name, rms=float(np.sqrt(np.mean(d * d))), max_abs=float(np.max(np.abs(d)))))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the analytical Sun/Moon series against a JPL ephemeris.")
    p.add_argument("--year-start", type=int, default=1950)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=7.0)
    p.add_argument("--series", choices=["full", "low"], default="full")
    p.add_argument("--kernel", default="de421.bsp")
    p.add_argument("--out-png", default=None)
    args = p.parse_args(argv)

    np = _need_numpy()
    jd0 = 2451545.0 + (args.year_start - 2000) * 365.25
    jd1 = 2451545.0 + (args.year_end - 2000) * 365.25
    jds = np.arange(jd0, jd1, args.step_days)

    print(f"Comparing {len(jds)} epochs against {args.kernel} ({args.series} lunar series)")
    for r in residuals(jds, args.series, args.kernel):
        print(f"  {r.body:5s}  rms = {r.rms:8.2f}\"   max = {r.max_abs:8.2f}\"")

    if args.out_png:
        plt = _need_matplotlib()
        load = _need_skyfield()
        eph = load(args.kernel)
        t = load.timescale().tt_jd(jds)
        _, lon, _ = eph["earth"].at(t).observe(eph["moon"]).apparent().ecliptic_latlon(epoch="date")
        d = [wrap180(pos.moon_longitude(float(jd), args.series) - float(r)) * 3600.0 for jd, r in zip(jds, lon.degrees)]
        fig, ax = plt.subplots(figsize=(12, 4))
        ax.plot(2000 + (jds - 2451545.0) / 365.25, d, lw=0.5)
        ax.set_ylabel("moon residual (arcsec)")
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=150)
        print(f"Wrote {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
