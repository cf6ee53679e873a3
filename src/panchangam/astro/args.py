from __future__ import annotations

import math
from dataclasses import dataclass


# ------------------------------------------------------------
# Angle helpers (degrees)
# ------------------------------------------------------------

TAU = 2.0 * math.pi

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = math.fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y

def wrap180(deg: float) -> float:
    """Wrap degrees to [-180, 180)."""
    return (deg + 180.0) % 360.0 - 180.0

def wrap_pi(rad: float) -> float:
    """Wrap radians to [-pi, pi)."""
    return (rad + math.pi) % TAU - math.pi

def wrap_tau(rad: float) -> float:
    """Wrap radians to [0, 2pi)."""
    return rad % TAU


# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0

def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


# ------------------------------------------------------------
# Fundamental arguments (Meeus ch. 47; degrees, wrapped)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    Lp_deg: float     # Moon's mean longitude
    D_deg: float      # mean elongation
    M_deg: float      # Sun's mean anomaly
    Mp_deg: float     # Moon's mean anomaly
    F_deg: float      # Moon's argument of latitude
    Omega_deg: float  # longitude of the ascending node


def fundamental_args(T: float) -> FundamentalArgs:
    """
    Mean elements of the Moon and Sun:
      L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000
      D  = 297.8501921 + 445267.1114034  T - 0.0018819 T^2 + T^3/545868  - T^4/113065000
      M  = 357.5291092 + 35999.0502909  T - 0.0001536 T^2 + T^3/24490000
      M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699   - T^4/14712000
      F  = 93.2720950  + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000
      Om = 125.04452   - 1934.136261 T    + 0.0020708 T^2 + T^3/450000
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    return FundamentalArgs(
        Lp_deg=wrap_deg(218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0),
        D_deg=wrap_deg(297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0),
        M_deg=wrap_deg(357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0),
        Mp_deg=wrap_deg(134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0),
        F_deg=wrap_deg(93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0),
        Omega_deg=wrap_deg(125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0),
    )


def eccentricity_factor(T: float) -> float:
    """Earth-orbit eccentricity factor E scaling lunar terms that contain M."""
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


@dataclass(frozen=True)
class SolarMean:
    L0_deg: float  # geometric mean longitude
    M_deg: float   # mean anomaly


def solar_mean_elements(T: float) -> SolarMean:
    T2 = T * T
    return SolarMean(
        L0_deg=wrap_deg(280.46646 + 36000.76983 * T + 0.0003032 * T2),
        M_deg=wrap_deg(357.52911 + 35999.05029 * T - 0.0001537 * T2),
    )


def mean_obliquity_deg(T: float) -> float:
    """Mean obliquity of the ecliptic, linear in T (adequate for +-a few centuries)."""
    return 23.439291 - 0.0130042 * T


# ------------------------------------------------------------
# Mean lunation
# ------------------------------------------------------------

SYNODIC_MONTH_DAYS = 29.530588861

def jde_mean_new_moon(k: float) -> float:
    """
    Mean JDE (TT) of the k-th new moon counted from 2000 January 6:
      JDE = 2451550.09766 + 29.530588861 k + 0.00015437 T^2 - 0.000000150 T^3 + 0.00000000073 T^4
    with T = k / 1236.85.
    """
    T = k / 1236.85
    T2 = T * T
    return (
        2451550.09766
        + SYNODIC_MONTH_DAYS * k
        + 0.00015437 * T2
        - 0.000000150 * T2 * T
        + 0.00000000073 * T2 * T2
    )
