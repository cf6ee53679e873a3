# astro/solar.py

from __future__ import annotations

import math

from . import args as aa
from ..core.types import EclipticPosition


def equation_of_center_deg(T: float, M_deg: float) -> float:
    M = math.radians(M_deg)
    return (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M)
        + 0.000289 * math.sin(3.0 * M)
    )


def sun_ecliptic(T: float) -> EclipticPosition:
    """
    True geometric longitude of the Sun (degrees, mean equinox of date), ~0.01 deg.
    Solar latitude is below 1.2" and taken as zero.
    """
    sm = aa.solar_mean_elements(T)
    return EclipticPosition(longitude=aa.wrap_deg(sm.L0_deg + equation_of_center_deg(T, sm.M_deg)), latitude=0.0)


def sun_apparent_longitude(T: float) -> float:
    """True longitude corrected for aberration and the leading nutation term."""
    omega = math.radians(aa.fundamental_args(T).Omega_deg)
    return aa.wrap_deg(sun_ecliptic(T).longitude - 0.00569 - 0.00478 * math.sin(omega))
