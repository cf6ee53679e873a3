"""Frame conversions and the sidereal (nirayana) correction.

Everything here takes JD(TT); callers convert from UTC with
`time_scales.jd_utc_to_jd_tt`.
"""
from __future__ import annotations

import math

from . import args as aa
from . import lunar, solar
from .vectors import rotate_x, unit_vector
from ..core.types import EclipticPosition, EquatorialPosition

# Lahiri (Chitrapaksha) ayanamsa, linear model
LAHIRI_J2000_DEG = 23.85305
PRECESSION_ARCSEC_PER_YEAR = 50.2788


def ecliptic_to_equatorial(pos: EclipticPosition, eps_deg: float) -> EquatorialPosition:
    """Rotate ecliptic (lon, lat) about the equinox direction by the obliquity."""
    p = rotate_x(unit_vector(math.radians(pos.longitude), math.radians(pos.latitude)), math.radians(eps_deg))
    ra = math.atan2(p[1], p[0])
    dec = math.asin(max(-1.0, min(1.0, float(p[2]))))
    return EquatorialPosition(right_ascension=ra, declination=dec)


def ayanamsa_deg(jd_tt: float, model: str = "lahiri") -> float:
    if model == "tropical":
        return 0.0
    if model == "lahiri":
        years = (jd_tt - aa.J2000_TT) / 365.25
        return LAHIRI_J2000_DEG + years * PRECESSION_ARCSEC_PER_YEAR / 3600.0
    raise ValueError("model must be one of: lahiri, tropical")


def sun_longitude(jd_tt: float) -> float:
    """Apparent tropical longitude of the Sun (degrees)."""
    return solar.sun_apparent_longitude(aa.T_centuries(jd_tt))


def moon_longitude(jd_tt: float, series: str = "full") -> float:
    """Apparent tropical longitude of the Moon (degrees)."""
    return lunar.moon_apparent_longitude(aa.T_centuries(jd_tt), series)


def elongation(jd_tt: float, series: str = "full") -> float:
    """Moon minus Sun, [0, 360)."""
    return aa.wrap_deg(moon_longitude(jd_tt, series) - sun_longitude(jd_tt))


def sun_equatorial(jd_tt: float) -> EquatorialPosition:
    T = aa.T_centuries(jd_tt)
    pos = EclipticPosition(longitude=solar.sun_apparent_longitude(T), latitude=0.0)
    return ecliptic_to_equatorial(pos, aa.mean_obliquity_deg(T))


def moon_equatorial(jd_tt: float, series: str = "full") -> EquatorialPosition:
    T = aa.T_centuries(jd_tt)
    return ecliptic_to_equatorial(lunar.moon_ecliptic(T, series), aa.mean_obliquity_deg(T))


def body_equatorial(body: str, jd_tt: float, series: str = "full") -> EquatorialPosition:
    if body == "sun":
        return sun_equatorial(jd_tt)
    if body == "moon":
        return moon_equatorial(jd_tt, series)
    raise ValueError("body must be one of: sun, moon")
