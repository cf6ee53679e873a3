"""
Solar and lunar eclipses (Meeus, Astronomical Algorithms, 2nd ed., ch. 54).

A lunation is numbered by k from the new moon of 2000 January 6: integer k
is a new moon (possible solar eclipse), k + 0.5 a full moon (possible lunar
eclipse). Times of greatest eclipse are good to a few minutes.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional

from . import args as aa
from . import time_scales as ts
from ..core.types import EclipseEvent

log = logging.getLogger(__name__)

LUNATIONS_PER_YEAR = 12.3685
_K0_JDE = 2451550.09766


def _sin(x_deg: float) -> float:
    return math.sin(math.radians(x_deg))


def _cos(x_deg: float) -> float:
    return math.cos(math.radians(x_deg))


def _solar_type(gamma: float, u: float) -> Optional[tuple]:
    g = abs(gamma)
    if g > 1.5433 + u:
        return None
    if g < 0.9972:
        if u < 0.0:
            return "total", None
        if u > 0.0047:
            return "annular", None
        omega = 0.00464 * math.sqrt(1.0 - gamma * gamma)
        return ("hybrid" if u < omega else "annular"), None
    if g < 0.9972 + abs(u):
        # non-central: the axis misses the Earth, the shadow cone still touches it
        return ("total" if u < 0.0 else "annular"), None
    return "partial", (1.5433 + u - g) / (0.5461 + 2.0 * u)


def _lunar_type(gamma: float, u: float) -> Optional[tuple]:
    g = abs(gamma)
    penumbral = (1.5573 + u - g) / 0.5450
    umbral = (1.0128 - u - g) / 0.5450
    if penumbral <= 0.0:
        return None
    if umbral <= 0.0:
        return "penumbral", penumbral
    return ("total" if umbral >= 1.0 else "partial"), umbral


def eclipse_at(k: float) -> Optional[EclipseEvent]:
    """
    Eclipse at lunation k, or None when the Moon is too far from a node.

    k must be an integer (new moon) or an integer + 0.5 (full moon).
    Meeus example 54.a: k = -82 gives the partial solar eclipse of
    1993 May 21, JDE 2449129.0979, gamma +1.1348, magnitude 0.740.
    """
    frac = k - math.floor(k)
    if frac not in (0.0, 0.5):
        raise ValueError("k must be an integer or an integer + 0.5")
    solar = frac == 0.0

    T = k / 1236.85
    T2 = T * T
    T3 = T2 * T
    T4 = T3 * T

    E = 1.0 - 0.002516 * T - 0.0000074 * T2
    M = 2.5534 + 29.10535670 * k - 0.0000014 * T2 - 0.00000011 * T3
    Mp = 201.5643 + 385.81693528 * k + 0.0107582 * T2 + 0.00001238 * T3 - 0.000000058 * T4
    F = 160.7108 + 390.67050284 * k - 0.0016118 * T2 - 0.00000227 * T3 + 0.000000011 * T4
    Om = 124.7746 - 1.56375588 * k + 0.0020672 * T2 + 0.00000215 * T3

    if abs(_sin(F)) > 0.36:
        return None

    F1 = F - 0.02665 * _sin(Om)
    A1 = 299.77 + 0.107408 * k - 0.009173 * T2

    jde = aa.jde_mean_new_moon(k)
    if solar:
        jde += -0.4075 * _sin(Mp) + 0.1721 * E * _sin(M)
    else:
        jde += -0.4065 * _sin(Mp) + 0.1727 * E * _sin(M)
    jde += (
        0.0161 * _sin(2 * Mp)
        - 0.0097 * _sin(2 * F1)
        + 0.0073 * E * _sin(Mp - M)
        - 0.0050 * E * _sin(Mp + M)
        - 0.0023 * _sin(Mp - 2 * F1)
        + 0.0021 * E * _sin(2 * M)
        + 0.0012 * _sin(Mp + 2 * F1)
        + 0.0006 * E * _sin(2 * Mp + M)
        - 0.0004 * _sin(3 * Mp)
        - 0.0003 * E * _sin(M + 2 * F1)
        + 0.0003 * _sin(A1)
        - 0.0002 * E * _sin(M - 2 * F1)
        - 0.0002 * E * _sin(2 * Mp - M)
        - 0.0002 * _sin(Om)
    )

    P = (
        0.2070 * E * _sin(M)
        + 0.0024 * E * _sin(2 * M)
        - 0.0392 * _sin(Mp)
        + 0.0116 * _sin(2 * Mp)
        - 0.0073 * E * _sin(Mp + M)
        + 0.0067 * E * _sin(Mp - M)
        + 0.0118 * _sin(2 * F1)
    )
    Q = (
        5.2207
        - 0.0048 * E * _cos(M)
        + 0.0020 * E * _cos(2 * M)
        - 0.3299 * _cos(Mp)
        - 0.0060 * E * _cos(Mp + M)
        + 0.0041 * E * _cos(Mp - M)
    )
    W = abs(_cos(F1))
    gamma = (P * _cos(F1) + Q * _sin(F1)) * (1.0 - 0.0048 * W)
    u = (
        0.0059
        + 0.0046 * E * _cos(M)
        - 0.0182 * _cos(Mp)
        + 0.0004 * _cos(2 * Mp)
        - 0.0005 * _cos(M + Mp)
    )

    found = _solar_type(gamma, u) if solar else _lunar_type(gamma, u)
    if found is None:
        return None
    kind, magnitude = found
    return EclipseEvent(
        kind="solar" if solar else "lunar",
        type=kind,
        peak=ts.from_julian_date(jde, "TT"),
        jde=jde,
        gamma=gamma,
        magnitude=magnitude,
    )


def eclipses_in_year(year: int) -> List[EclipseEvent]:
    """Every solar and lunar eclipse whose greatest phase falls in the UTC year, in time order."""
    k0 = math.floor((year - 2000) * LUNATIONS_PER_YEAR) - 1
    out: List[EclipseEvent] = []
    for n in range(16):
        for k in (k0 + n, k0 + n + 0.5):
            e = eclipse_at(k)
            if e is not None and e.peak.year == year:
                out.append(e)
    out.sort(key=lambda e: e.peak)
    log.debug("%d eclipses in %d", len(out), year)
    return out


def next_eclipse(after: datetime) -> EclipseEvent:
    """First eclipse of either kind whose greatest phase is after `after` (naive = UTC)."""
    if after.tzinfo is None:
        after = after.replace(tzinfo=timezone.utc)
    jd = ts.datetime_to_jd_utc(after)
    k = math.floor(2.0 * (jd - _K0_JDE) / aa.SYNODIC_MONTH_DAYS) / 2.0 - 0.5
    while True:
        e = eclipse_at(k)
        if e is not None and e.peak > after:
            return e
        k += 0.5
