"""The five limbs and the derived calendar attributes at an instant.

All angles are apparent geocentric longitudes of date. Tithi and karana use
the elongation Moon - Sun; nakshatra, yoga, raasi, masa and ayana use
sidereal longitudes (tropical minus ayanamsa).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from . import names as nm
from ._solver import solve_angle
from ..astro import args as aa
from ..astro import positions as pos
from ..astro import time_scales as ts
from ..astro.riseset import rise_set
from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.types import (
    CalculatedPanchangam,
    Element,
    Estimate,
    GeographicCoordinate,
    Masa,
    Paksha,
)

log = logging.getLogger(__name__)

TITHI_DEG = 12.0
KARANA_DEG = 6.0
NAKSHATRA_DEG = 360.0 / 27.0
YOGA_DEG = 360.0 / 27.0
RAASI_DEG = 30.0

# mean rates (deg/day) used for first guesses
ELONGATION_RATE = 12.19
MOON_RATE = 13.18
SUM_RATE = 14.17


# ------------------------------------------------------------
# Angular quantities as functions of JD(UTC)
# ------------------------------------------------------------

@dataclass(frozen=True)
class Quantities:
    """Longitudes (degrees) at one instant."""
    jd_utc: float
    sun: float
    moon: float
    ayanamsa: float

    @property
    def elongation(self) -> float:
        return aa.wrap_deg(self.moon - self.sun)

    @property
    def sidereal_sun(self) -> float:
        return aa.wrap_deg(self.sun - self.ayanamsa)

    @property
    def sidereal_moon(self) -> float:
        return aa.wrap_deg(self.moon - self.ayanamsa)

    @property
    def sidereal_sum(self) -> float:
        return aa.wrap_deg(self.sun + self.moon - 2.0 * self.ayanamsa)


def quantities(jd_utc: float, config: EngineConfig = DEFAULT_CONFIG) -> Quantities:
    jd_tt = ts.jd_utc_to_jd_tt(jd_utc)
    return Quantities(
        jd_utc=jd_utc,
        sun=pos.sun_longitude(jd_tt),
        moon=pos.moon_longitude(jd_tt, config.moon_series),
        ayanamsa=pos.ayanamsa_deg(jd_tt, config.ayanamsa),
    )


@dataclass(frozen=True)
class _Limb:
    kind: str
    span_deg: float
    rate: float
    angle: Callable[[Quantities], float]


_TITHI = _Limb("tithi", TITHI_DEG, ELONGATION_RATE, lambda q: q.elongation)
_KARANA = _Limb("karana", KARANA_DEG, ELONGATION_RATE, lambda q: q.elongation)
_NAKSHATRA = _Limb("nakshatra", NAKSHATRA_DEG, MOON_RATE, lambda q: q.sidereal_moon)
_YOGA = _Limb("yoga", YOGA_DEG, SUM_RATE, lambda q: q.sidereal_sum)


def _index(angle: float, span: float, count: int) -> int:
    # guard against angle/span rounding up to `count` just below 360
    return min(int(math.floor(angle / span)), count - 1)


def karana_index(slot: int) -> int:
    """Half-tithi slot 0..59 -> index into KARANA_NAMES."""
    if slot == 0:
        return 10  # Kimstughna
    if slot >= 57:
        return slot - 50  # Shakuni, Chatushpada, Naga
    return (slot - 1) % 7


def _boundary(limb: _Limb, target: float, t0: float, config: EngineConfig) -> Estimate:
    return solve_angle(
        lambda jd: limb.angle(quantities(jd, config)),
        aa.wrap_deg(target),
        t0=t0,
        rate=limb.rate,
        tol=config.boundary_tolerance_days,
        max_iter=config.boundary_max_iter,
    )


def limb_span(limb: _Limb, q: Quantities, config: EngineConfig) -> Tuple[int, Estimate, Estimate]:
    """Slot index of the limb at q and the estimates of its start and end."""
    count = int(round(360.0 / limb.span_deg))
    a = limb.angle(q)
    k = _index(a, limb.span_deg, count)
    lo = k * limb.span_deg
    hi = (k + 1) * limb.span_deg
    start = _boundary(limb, lo, q.jd_utc - (a - lo) / limb.rate, config)
    end = _boundary(limb, hi, q.jd_utc + (hi - a) / limb.rate, config)
    if not (start.converged and end.converged):
        log.debug("%s %d boundaries not converged near JD %.5f", limb.kind, k, q.jd_utc)
    return k, start, end


def _element(limb: _Limb, q: Quantities, config: EngineConfig, name_of: Callable[[int], str], index_of=None) -> Element:
    k, start, end = limb_span(limb, q, config)
    idx = k if index_of is None else index_of(k)
    return Element(
        kind=limb.kind,
        index=idx,
        name=name_of(idx),
        start=start.utc,
        end=end.utc,
        converged=start.converged and end.converged,
    )


def tithi_at(q: Quantities, config: EngineConfig = DEFAULT_CONFIG) -> Element:
    return _element(_TITHI, q, config, lambda i: nm.TITHI_NAMES[i])


def karana_at(q: Quantities, config: EngineConfig = DEFAULT_CONFIG) -> Element:
    return _element(_KARANA, q, config, lambda i: nm.KARANA_NAMES[i], karana_index)


def nakshatra_at(q: Quantities, config: EngineConfig = DEFAULT_CONFIG) -> Element:
    return _element(_NAKSHATRA, q, config, lambda i: nm.NAKSHATRA_NAMES[i])


def yoga_at(q: Quantities, config: EngineConfig = DEFAULT_CONFIG) -> Element:
    return _element(_YOGA, q, config, lambda i: nm.YOGA_NAMES[i])


def nakshatras_between(start: datetime, end: datetime, config: EngineConfig = DEFAULT_CONFIG) -> Tuple[Element, ...]:
    """Every nakshatra span that prevails at some instant of [start, end)."""
    out = []
    t, stop = _as_utc(start), _as_utc(end)
    while t < stop:
        e = nakshatra_at(quantities(ts.datetime_to_jd_utc(t), config), config)
        if not out or e.index != out[-1].index:
            out.append(e)
        # step past the boundary tolerance into the next span
        t = max(e.end, t) + timedelta(seconds=60)
    return tuple(out)


def tithi_index_at(jd_utc: float, config: EngineConfig = DEFAULT_CONFIG) -> int:
    return _index(quantities(jd_utc, config).elongation, TITHI_DEG, 30)


def tithi_span(jd_utc: float, config: EngineConfig = DEFAULT_CONFIG) -> Tuple[int, Estimate, Estimate]:
    return limb_span(_TITHI, quantities(jd_utc, config), config)


# ------------------------------------------------------------
# Lunar month
# ------------------------------------------------------------

def new_moon_near(jd_guess: float, config: EngineConfig = DEFAULT_CONFIG) -> float:
    """JD(UTC) of the conjunction closest to jd_guess (within ~half a lunation)."""
    est = solve_angle(
        lambda jd: quantities(jd, config).elongation,
        0.0,
        t0=jd_guess,
        rate=ELONGATION_RATE,
        tol=config.boundary_tolerance_days,
        max_iter=config.boundary_max_iter,
    )
    return est.jd


def previous_new_moon(jd_utc: float, config: EngineConfig = DEFAULT_CONFIG) -> float:
    e = quantities(jd_utc, config).elongation
    jd = new_moon_near(jd_utc - e / ELONGATION_RATE, config)
    if jd > jd_utc:
        jd = new_moon_near(jd - aa.SYNODIC_MONTH_DAYS, config)
    return jd


def next_new_moon(jd_utc: float, config: EngineConfig = DEFAULT_CONFIG) -> float:
    e = quantities(jd_utc, config).elongation
    jd = new_moon_near(jd_utc + (360.0 - e) / ELONGATION_RATE, config)
    if jd <= jd_utc:
        jd = new_moon_near(jd + aa.SYNODIC_MONTH_DAYS, config)
    return jd


def _sun_sign(jd_utc: float, config: EngineConfig) -> int:
    return _index(quantities(jd_utc, config).sidereal_sun, RAASI_DEG, 12)


def masa_between(nm_open: float, nm_close: float, config: EngineConfig = DEFAULT_CONFIG) -> Masa:
    """
    Amanta month opened by the new moon `nm_open` and closed by `nm_close`.

    Named from the Sun's sidereal sign at the opening conjunction (Meena opens
    Chaitra). No sign change across the lunation makes it adhika.
    """
    s0 = _sun_sign(nm_open, config)
    s1 = _sun_sign(nm_close, config)
    idx = (s0 + 1) % 12
    return Masa(index=idx, name=nm.MASA_NAMES[idx], is_adhika=(s0 == s1))


def masa_at(jd_utc: float, config: EngineConfig = DEFAULT_CONFIG) -> Masa:
    prev_nm = previous_new_moon(jd_utc, config)
    next_nm = next_new_moon(jd_utc, config)
    if config.month_scheme == "purnimanta" and quantities(jd_utc, config).elongation >= 180.0:
        # krishna paksha belongs to the month that starts at the coming new moon
        return masa_between(next_nm, next_new_moon(next_nm + 1.0, config), config)
    return masa_between(prev_nm, next_nm, config)


# ------------------------------------------------------------
# Derived attributes
# ------------------------------------------------------------

def ayana_name(sidereal_sun: float) -> str:
    return nm.AYANA_NAMES[0] if (sidereal_sun >= 270.0 or sidereal_sun < 90.0) else nm.AYANA_NAMES[1]


def ritu_name(masa: Masa) -> str:
    return nm.RITU_NAMES[masa.index // 2]


def drik_ritu_name(sidereal_sun: float) -> str:
    """Season from the Sun's position: one ritu per 60 degrees from Mesha."""
    return nm.RITU_NAMES[int(aa.wrap_deg(sidereal_sun) // 60.0) % 6]


def gana_name(nakshatra_index: int) -> str:
    return nm.GANA_NAMES[nm.NAKSHATRA_GANA[nakshatra_index]]


def guna_name(raasi_index: int) -> str:
    return nm.GUNA_NAMES[raasi_index % 3]


def trinity_name(nakshatra_index: int) -> str:
    return nm.TRINITY_NAMES[nakshatra_index // 9]


def lunar_year(civil: date, masa: Masa) -> int:
    """Civil year in which the current lunar year (from amanta Chaitra) began."""
    if civil.month <= 4 and (masa.index >= 8 or (masa.index == 0 and masa.is_adhika)):
        return civil.year - 1
    return civil.year


def samvatsara_name(year: int) -> str:
    return nm.SAMVATSARA_NAMES[(year - nm.SAMVATSARA_BASE_YEAR) % 60]


def vara_name(instant: datetime, coord: GeographicCoordinate, config: EngineConfig) -> str:
    """Weekday; the day begins at local sunrise."""
    local = ts.utc_to_local(instant, config.tz_offset_hours)
    rs = rise_set(local.date(), coord, "sun", tz_offset_hours=config.tz_offset_hours, config=config)
    d = local.date()
    if rs.rise_utc is not None and instant < rs.rise_utc:
        d = d - timedelta(days=1)
    return nm.VARA_NAMES[d.weekday()]


# ------------------------------------------------------------
# calculate
# ------------------------------------------------------------

def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def calculate(
    instant: datetime,
    coord: GeographicCoordinate,
    config: Optional[EngineConfig] = None,
) -> CalculatedPanchangam:
    """Panchangam prevailing at `instant` (naive datetimes are UTC) for an observer at `coord`."""
    cfg = config or DEFAULT_CONFIG
    t = _as_utc(instant)
    q = quantities(ts.datetime_to_jd_utc(t), cfg)

    tithi = tithi_at(q, cfg)
    nakshatra = nakshatra_at(q, cfg)
    p = 0 if tithi.index < 15 else 1
    raasi = _index(q.sidereal_moon, RAASI_DEG, 12)
    masa = masa_at(q.jd_utc, cfg)
    local_date = ts.utc_to_local(t, cfg.tz_offset_hours).date()

    return CalculatedPanchangam(
        instant=t,
        vara=vara_name(t, coord, cfg),
        tithi=tithi,
        paksha=Paksha(index=p, name=nm.PAKSHA_NAMES[p]),
        nakshatra=nakshatra,
        yoga=yoga_at(q, cfg),
        karana=karana_at(q, cfg),
        masa=masa,
        raasi=nm.RAASI_NAMES[raasi],
        ritu=ritu_name(masa),
        ayana=ayana_name(q.sidereal_sun),
        samvatsara=samvatsara_name(lunar_year(local_date, masa)),
        gana=gana_name(nakshatra.index),
        guna=guna_name(raasi),
        trinity=trinity_name(nakshatra.index),
        drik_ritu=drik_ritu_name(q.sidereal_sun),
        sun_longitude=q.sun,
        moon_longitude=q.moon,
        ayanamsa=q.ayanamsa,
    )
