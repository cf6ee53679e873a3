# astro/lunar.py

from __future__ import annotations

import math
from typing import Sequence, Tuple

from . import args as aa
from ..core.types import EclipticPosition


# Periodic terms of the ELP-2000/82 theory in Meeus' truncation (ch. 47).
# (D, M, M', F, coefficient in microdegrees)
LUNAR_LON_TERMS: Tuple[Tuple[int, int, int, int, int], ...] = (
    (0, 0, 1, 0, 6288774),
    (2, 0, -1, 0, 1274027),
    (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618),
    (0, 1, 0, 0, -185116),
    (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793),
    (2, -1, -1, 0, 57066),
    (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758),
    (0, 1, -1, 0, -40923),
    (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383),
    (2, 0, 0, -2, 15327),
    (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980),
    (4, 0, -1, 0, 10675),
    (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548),
    (2, 1, -1, 0, -7888),
    (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163),
    (1, 1, 0, 0, 4987),
    (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994),
    (4, 0, 0, 0, 3861),
    (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689),
    (2, 0, -1, 2, -2602),
    (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348),
    (2, -2, 0, 0, 2236),
    (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069),
    (2, -2, -1, 0, 2048),
    (2, 0, 1, -2, -1773),
    (2, 0, 0, 2, -1595),
    (4, -1, -1, 0, 1215),
    (0, 0, 2, 2, -1110),
    (3, 0, -1, 0, -892),
    (2, 1, 1, 0, -810),
    (4, -1, -2, 0, 759),
    (0, 2, -1, 0, -713),
    (2, 2, -1, 0, -700),
    (2, 1, -2, 0, 691),
    (2, -1, 0, -2, 596),
    (4, 0, 1, 0, 549),
    (0, 0, 4, 0, 537),
    (4, -1, 0, 0, 520),
    (1, 0, -2, 0, -487),
    (2, 1, 0, -2, -399),
    (0, 0, 2, -2, -381),
    (1, 1, 1, 0, 351),
    (3, 0, -2, 0, -340),
    (4, 0, -3, 0, 330),
    (2, -1, 2, 0, 327),
    (0, 2, 1, 0, -323),
    (1, 1, -1, 0, 299),
    (2, 0, 3, 0, 294),
)

LUNAR_LAT_TERMS: Tuple[Tuple[int, int, int, int, int], ...] = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)

# Six longitude and four latitude terms (degrees): (amplitude, phase, rate per century).
# Arc-minute level; cheap enough for the inner loop of rise/set searches.
LOW_LON_TERMS = (
    (6.29, 134.9, 477198.85),
    (-1.27, 259.2, -413335.38),
    (0.66, 235.7, 890534.23),
    (0.21, 269.9, 954397.70),
    (-0.19, 357.5, 35999.05),
    (-0.11, 186.6, 966404.05),
)
LOW_LAT_TERMS = (
    (5.13, 93.3, 483202.03),
    (0.28, 228.2, 960400.87),
    (-0.28, 318.3, 6003.18),
    (-0.17, 217.6, -407332.20),
)


def _sum_terms(terms: Sequence[Tuple[int, int, int, int, int]], fa: aa.FundamentalArgs, E: float) -> float:
    D = math.radians(fa.D_deg)
    M = math.radians(fa.M_deg)
    Mp = math.radians(fa.Mp_deg)
    F = math.radians(fa.F_deg)
    total = 0.0
    for d, m, mp, f, coef in terms:
        c = float(coef)
        if abs(m) == 1:
            c *= E
        elif abs(m) == 2:
            c *= E * E
        total += c * math.sin(d * D + m * M + mp * Mp + f * F)
    return total


def moon_ecliptic_full(T: float) -> EclipticPosition:
    """
    Geometric ecliptic longitude/latitude of the Moon (degrees, mean equinox of date).
    Accurate to roughly 10" in longitude and 4" in latitude.
    """
    fa = aa.fundamental_args(T)
    E = aa.eccentricity_factor(T)

    A1 = math.radians(119.75 + 131.849 * T)
    A2 = math.radians(53.09 + 479264.290 * T)
    A3 = math.radians(313.45 + 481266.484 * T)
    Lp = math.radians(fa.Lp_deg)
    Mp = math.radians(fa.Mp_deg)
    F = math.radians(fa.F_deg)

    sl = _sum_terms(LUNAR_LON_TERMS, fa, E)
    # Venus, Jupiter and Earth-flattening additive terms
    sl += 3958.0 * math.sin(A1) + 1962.0 * math.sin(Lp - F) + 318.0 * math.sin(A2)

    sb = _sum_terms(LUNAR_LAT_TERMS, fa, E)
    sb += (
        -2235.0 * math.sin(Lp)
        + 382.0 * math.sin(A3)
        + 175.0 * math.sin(A1 - F)
        + 175.0 * math.sin(A1 + F)
        + 127.0 * math.sin(Lp - Mp)
        - 115.0 * math.sin(Lp + Mp)
    )

    return EclipticPosition(longitude=aa.wrap_deg(fa.Lp_deg + sl * 1e-6), latitude=sb * 1e-6)


def moon_ecliptic_low(T: float) -> EclipticPosition:
    lon = 218.32 + 481267.8813 * T
    for amp, phase, rate in LOW_LON_TERMS:
        lon += amp * math.sin(math.radians(phase + rate * T))
    lat = 0.0
    for amp, phase, rate in LOW_LAT_TERMS:
        lat += amp * math.sin(math.radians(phase + rate * T))
    return EclipticPosition(longitude=aa.wrap_deg(lon), latitude=lat)


def moon_ecliptic(T: float, series: str = "full") -> EclipticPosition:
    """Moon's ecliptic position at T Julian centuries (TT) from J2000.0."""
    if series == "full":
        return moon_ecliptic_full(T)
    if series == "low":
        return moon_ecliptic_low(T)
    raise ValueError("series must be one of: full, low")


def nutation_in_longitude_deg(T: float) -> float:
    """Leading term of the nutation in longitude."""
    return -0.00478 * math.sin(math.radians(aa.fundamental_args(T).Omega_deg))


def moon_apparent_longitude(T: float, series: str = "full") -> float:
    return aa.wrap_deg(moon_ecliptic(T, series).longitude + nutation_in_longitude_deg(T))
