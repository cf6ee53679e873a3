from __future__ import annotations

import math

from . import args as aa
from ..core.types import EquatorialPosition


def gmst_deg(jd_ut: float) -> float:
    """
    Greenwich mean sidereal time (IAU 1982), degrees in [0, 360).

    GMST[s] = 67310.54841 + (876600 h + 8640184.812866 s) T + 0.093104 T^2 - 6.2e-6 T^3
    """
    T = (jd_ut - aa.J2000_TT) / 36525.0
    seconds = (
        67310.54841
        + (876600.0 * 3600.0 + 8640184.812866) * T
        + 0.093104 * T * T
        - 6.2e-6 * T * T * T
    )
    return (seconds % 86400.0) / 240.0


def gmst_rad(jd_ut: float) -> float:
    return math.radians(gmst_deg(jd_ut))


def local_sidereal_rad(jd_ut: float, longitude_deg: float) -> float:
    return aa.wrap_tau(gmst_rad(jd_ut) + math.radians(longitude_deg))


def hour_angle_rad(jd_ut: float, longitude_deg: float, eq: EquatorialPosition) -> float:
    """Local hour angle, [0, 2pi)."""
    return aa.wrap_tau(local_sidereal_rad(jd_ut, longitude_deg) - eq.right_ascension)


def altitude_deg(jd_ut: float, latitude_deg: float, longitude_deg: float, eq: EquatorialPosition) -> float:
    H = hour_angle_rad(jd_ut, longitude_deg, eq)
    phi = math.radians(latitude_deg)
    s = math.sin(phi) * math.sin(eq.declination) + math.cos(phi) * math.cos(eq.declination) * math.cos(H)
    return math.degrees(math.asin(max(-1.0, min(1.0, s))))
