"""Rise and set of the Sun and Moon for one local day.

The event is found by iterating on the local hour angle: at each estimate the
body's declination fixes the hour angle H0 at which it crosses the horizon,
and the time is advanced by (target - current hour angle) / nominal rate,
clamped to half a day.
"""
from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from . import args as aa
from . import time_scales as ts
from .positions import body_equatorial
from .sidereal import hour_angle_rad
from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.types import Converged, Estimate, GeographicCoordinate, NotConverged, RiseSetResult

log = logging.getLogger(__name__)

# apparent hour-angle rate (degrees / day)
NOMINAL_RATE_DEG = {"sun": 360.0, "moon": 347.81}

SUN_H0_DEG = -0.833               # refraction + semi-diameter
MOON_SIN_H0 = 0.00233             # refraction + semi-diameter - mean horizontal parallax

MAX_CORRECTION_DAYS = 0.5


def horizon_sin_h0(body: str) -> float:
    if body == "sun":
        return math.sin(math.radians(SUN_H0_DEG))
    if body == "moon":
        return MOON_SIN_H0
    raise ValueError("body must be one of: sun, moon")


def hour_angle_correction(target: float, current: float, rate: float) -> float:
    """Days to move hour angle `current` onto `target` (radians) at `rate` rad/day, within +-0.5 day."""
    step = aa.wrap_pi(target - current) / rate
    return max(-MAX_CORRECTION_DAYS, min(MAX_CORRECTION_DAYS, step))


def _solve_event(
    body: str,
    kind: str,
    coord: GeographicCoordinate,
    jd_start: float,
    config: EngineConfig,
) -> Optional[Estimate]:
    rate = math.radians(NOMINAL_RATE_DEG[body])  # rad / day
    period = aa.TAU / rate
    sin_h0 = horizon_sin_h0(body)
    lat = coord.geocentric_latitude_deg() if body == "moon" else coord.latitude
    sin_phi, cos_phi = math.sin(math.radians(lat)), math.cos(math.radians(lat))

    jd = jd_start
    total = 0.0
    crossed = False
    n = 0
    step = math.inf
    while n < config.rise_max_iter and abs(step) > config.rise_tolerance_days:
        n += 1
        eq = body_equatorial(body, ts.jd_utc_to_jd_tt(jd), config.moon_series)
        denom = cos_phi * math.cos(eq.declination)
        cos_h = (sin_h0 - sin_phi * math.sin(eq.declination)) / denom if denom != 0.0 else 2.0
        if abs(cos_h) > 1.0:
            # no horizon crossing at this declination: look one day later
            crossed = False
            step = 1.0
        else:
            crossed = True
            h0 = math.acos(cos_h)
            target = aa.TAU - h0 if kind == "rise" else h0
            step = hour_angle_correction(target, hour_angle_rad(jd, coord.longitude, eq), rate)
            if total + step < 0.0:
                # the crossing before the day start: move on to the next one
                step += period
        total += step
        jd += step

    if not crossed:
        log.debug("%s %s: no horizon crossing near JD %.5f", body, kind, jd_start)
        return None
    if abs(step) > config.rise_tolerance_days:
        log.debug("%s %s: not converged after %d iterations (last step %.1f s)", body, kind, n, step * 86400.0)
        return NotConverged(jd=jd, iterations=n)
    return Converged(jd=jd, iterations=n)


def rise_set(
    day: date,
    coord: GeographicCoordinate,
    body: str = "sun",
    *,
    tz_offset_hours: Optional[float] = None,
    config: Optional[EngineConfig] = None,
) -> RiseSetResult:
    """
    Rise and set of `body` ('sun' | 'moon') during the local day `day`.

    The day runs from local midnight at `tz_offset_hours` (observer's mean
    solar time when None) for 24 hours. An event that does not happen in that
    window (polar day/night, the daily moonrise gap) is None.
    """
    cfg = config or DEFAULT_CONFIG
    if body not in NOMINAL_RATE_DEG:
        raise ValueError("body must be one of: sun, moon")
    offset = ts.lmt_offset_hours(coord.longitude) if tz_offset_hours is None else tz_offset_hours
    jd_start = ts.local_midnight_jd(day, offset)
    jd_end = jd_start + 1.0

    events = {}
    for kind in ("rise", "set"):
        est = _solve_event(body, kind, coord, jd_start, cfg)
        if est is not None and not (jd_start <= est.jd < jd_end):
            log.debug("%s %s on %s falls outside the local day", body, kind, day)
            est = None
        events[kind] = est
    return RiseSetResult(body=body, day=day, rise=events["rise"], set=events["set"])
