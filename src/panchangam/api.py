from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple, Union

from .astro import eclipses as _eclipses
from .astro import time_scales as ts
from .astro.riseset import rise_set as _rise_set
from .config import DEFAULT_CONFIG, EngineConfig
from .core.types import (
    CalculatedPanchangam,
    DailyPanchangam,
    EclipseEvent,
    GeographicCoordinate,
    RiseSetResult,
    TimeWindow,
    TithiOccurrence,
)
from .engines import elements, lookup, muhurta

Coordinate = Union[GeographicCoordinate, Tuple[float, float]]


def _coord(c: Coordinate) -> GeographicCoordinate:
    if isinstance(c, GeographicCoordinate):
        return c
    lat, lon = c
    return GeographicCoordinate(float(lat), float(lon))


def calculate(instant: datetime, coordinate: Coordinate, *, config: Optional[EngineConfig] = None) -> CalculatedPanchangam:
    return elements.calculate(instant, _coord(coordinate), config)


def rise_set(
    day: date,
    coordinate: Coordinate,
    body: str = "sun",
    *,
    tz_offset_hours: Optional[float] = None,
    config: Optional[EngineConfig] = None,
) -> RiseSetResult:
    return _rise_set(day, _coord(coordinate), body, tz_offset_hours=tz_offset_hours, config=config)


def daily(day: date, coordinate: Coordinate, *, config: Optional[EngineConfig] = None) -> DailyPanchangam:
    """
    Panchangam of one civil day: Sun/Moon rise and set in the configured
    time zone, the limbs prevailing at sunrise and the day's windows.
    'varjyam_periods' holds the nakshatra-proportional varjyam touching the
    civil day; the other windows need a sunrise and sunset.
    """
    cfg = config or DEFAULT_CONFIG
    coord = _coord(coordinate)
    tz = cfg.tz_offset_hours

    sun = _rise_set(day, coord, "sun", tz_offset_hours=tz, config=cfg)
    sun_next = _rise_set(day + timedelta(days=1), coord, "sun", tz_offset_hours=tz, config=cfg)
    moon = _rise_set(day, coord, "moon", tz_offset_hours=tz, config=cfg)

    if sun.rise is not None:
        at = sun.rise.utc
    else:
        at = ts.jd_utc_to_datetime(ts.local_midnight_jd(day, tz) + 0.25)
    p = elements.calculate(at, coord, cfg)

    def local(t: Optional[datetime]) -> Optional[datetime]:
        return None if t is None else ts.utc_to_local(t, tz)

    sunrise, sunset, next_sunrise = local(sun.rise_utc), local(sun.set_utc), local(sun_next.rise_utc)
    windows: Tuple[Tuple[str, Tuple[TimeWindow, ...]], ...] = ()
    if sunrise is not None and sunset is not None and next_sunrise is not None and sunrise < sunset:
        windows = muhurta.good_bad_times(sunrise, sunset, next_sunrise, day.weekday(), p.nakshatra.name)

    # nakshatra-proportional varjyam over the civil day
    midnight = ts.jd_utc_to_datetime(ts.local_midnight_jd(day, tz))
    periods = muhurta.varjyam_periods(
        elements.nakshatras_between(midnight, midnight + timedelta(days=1), cfg),
        midnight,
        midnight + timedelta(days=1),
    )
    windows += (("varjyam_periods", tuple(TimeWindow(local(w.start), local(w.end)) for w in periods)),)

    return DailyPanchangam(
        day=day,
        coordinate=coord,
        tz_offset_hours=tz,
        sunrise=sunrise,
        sunset=sunset,
        next_sunrise=next_sunrise,
        moonrise=local(moon.rise_utc),
        moonset=local(moon.set_utc),
        panchangam=p,
        windows=windows,
    )


def good_bad_times(day: DailyPanchangam) -> Tuple[Tuple[str, Tuple[TimeWindow, ...]], ...]:
    return day.windows


def find_date_by_tithi(year: int, masa: str, paksha: str, tithi: Union[str, int], lat: float, lng: float, *, config: Optional[EngineConfig] = None) -> Optional[date]:
    return lookup.find_date_by_tithi(year, masa, paksha, tithi, lat, lng, config=config)


def find_all_dates_by_tithi(year: int, masa: str, paksha: str, tithi: Union[str, int], lat: float, lng: float, *, config: Optional[EngineConfig] = None) -> List[date]:
    return lookup.find_all_dates_by_tithi(year, masa, paksha, tithi, lat, lng, config=config)


def find_tithi_occurrences(year: int, masa: str, paksha: str, tithi: Union[str, int], lat: float, lng: float, *, config: Optional[EngineConfig] = None) -> List[TithiOccurrence]:
    return lookup.find_tithi_occurrences(year, masa, paksha, tithi, lat, lng, config=config)


def tithi_dates(year: int, tithi_index: int, lat: float, lng: float, *, config: Optional[EngineConfig] = None) -> List[TithiOccurrence]:
    return lookup.tithi_dates(year, tithi_index, lat, lng, config=config)


def eclipses(year: int) -> List[EclipseEvent]:
    return _eclipses.eclipses_in_year(year)


def next_eclipse(after: datetime) -> EclipseEvent:
    return _eclipses.next_eclipse(after)
