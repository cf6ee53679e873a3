"""Reverse lookup: civil dates on which a (masa, paksha, tithi) prevails.

A date carries the tithi current at its local sunrise. A tithi that begins
and ends between two sunrises (kshaya) is attributed to the earlier date; a
tithi current at two sunrises (vriddhi) is reported on the first date only.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterator, List, Optional, Tuple, Union

from . import names as nm
from .elements import masa_at, tithi_index_at, tithi_span
from ..astro import time_scales as ts
from ..astro.riseset import rise_set
from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.types import GeographicCoordinate, Paksha, TithiOccurrence

log = logging.getLogger(__name__)

MAX_SCAN_DAYS = 400


def sunrise_jd(d: date, coord: GeographicCoordinate, config: EngineConfig) -> float:
    """JD(UTC) of sunrise on local date d; 06:00 local time when the Sun does not rise."""
    rs = rise_set(d, coord, "sun", tz_offset_hours=config.tz_offset_hours, config=config)
    if rs.rise is not None:
        return rs.rise.jd
    return ts.local_midnight_jd(d, config.tz_offset_hours) + 0.25


def _scan_year(year: int, coord: GeographicCoordinate, config: EngineConfig) -> Iterator[Tuple[date, int, float, bool]]:
    """
    Yield (civil date, tithi index, JD inside that tithi, kshaya) for every
    tithi attributed to a date of `year`, in order.
    """
    first = date(year, 1, 1)
    last = date(year, 12, 31)
    n_days = min((last - first).days + 1, MAX_SCAN_DAYS)

    # sunrise tithi from the day before Jan 1 to the day after Dec 31
    days = [first + timedelta(days=i) for i in range(-1, n_days + 1)]
    rises = [sunrise_jd(d, coord, config) for d in days]
    idx = [tithi_index_at(jd, config) for jd in rises]

    for i in range(1, n_days + 1):
        d = days[i]
        if idx[i] != idx[i - 1]:
            yield d, idx[i], rises[i], False
        if (idx[i + 1] - idx[i]) % 30 == 2:
            _, _, end = tithi_span(rises[i], config)
            yield d, (idx[i] + 1) % 30, end.jd + 60.0 / 86400.0, True


def _occurrence(d: date, k: int, sample_jd: float, kshaya: bool, config: EngineConfig) -> TithiOccurrence:
    k_span, start, end = tithi_span(sample_jd, config)
    if k_span != k:
        log.debug("tithi at sample %.5f is %d, expected %d", sample_jd, k_span, k)
    masa = masa_at(0.5 * (start.jd + end.jd), config)
    p = 0 if k < 15 else 1
    return TithiOccurrence(
        gregorian_date=d,
        tithi_index=k,
        start=start.utc,
        end=end.utc,
        masa=masa,
        paksha=Paksha(index=p, name=nm.PAKSHA_NAMES[p]),
        kshaya=kshaya,
    )


def find_tithi_occurrences(
    year: int,
    masa: str,
    paksha: str,
    tithi: Union[str, int],
    lat: float,
    lng: float,
    *,
    config: Optional[EngineConfig] = None,
) -> List[TithiOccurrence]:
    """All occurrences of the (masa, paksha, tithi) triple in a civil year, oldest first."""
    cfg = config or DEFAULT_CONFIG
    coord = GeographicCoordinate(lat, lng)
    m = nm.masa_index(masa)
    k = nm.tithi_index(tithi, paksha)
    if m is None or k is None:
        log.debug("no match for masa=%r paksha=%r tithi=%r", masa, paksha, tithi)
        return []

    out: List[TithiOccurrence] = []
    for d, k_day, sample, kshaya in _scan_year(year, coord, cfg):
        if k_day != k:
            continue
        occ = _occurrence(d, k_day, sample, kshaya, cfg)
        if occ.masa.index == m:
            out.append(occ)
    log.debug("%d occurrence(s) of %s/%s/%s in %d", len(out), masa, paksha, tithi, year)
    return out


def find_all_dates_by_tithi(
    year: int,
    masa: str,
    paksha: str,
    tithi: Union[str, int],
    lat: float,
    lng: float,
    *,
    config: Optional[EngineConfig] = None,
) -> List[date]:
    dates: List[date] = []
    for occ in find_tithi_occurrences(year, masa, paksha, tithi, lat, lng, config=config):
        if occ.gregorian_date not in dates:
            dates.append(occ.gregorian_date)
    return dates


def find_date_by_tithi(
    year: int,
    masa: str,
    paksha: str,
    tithi: Union[str, int],
    lat: float,
    lng: float,
    *,
    config: Optional[EngineConfig] = None,
) -> Optional[date]:
    dates = find_all_dates_by_tithi(year, masa, paksha, tithi, lat, lng, config=config)
    return dates[0] if dates else None


def tithi_dates(
    year: int,
    tithi_index: int,
    lat: float,
    lng: float,
    *,
    config: Optional[EngineConfig] = None,
) -> List[TithiOccurrence]:
    """Every occurrence of one tithi (0..29) in a civil year, in any month."""
    if not 0 <= tithi_index < 30:
        raise ValueError("tithi_index must be in 0..29")
    cfg = config or DEFAULT_CONFIG
    coord = GeographicCoordinate(lat, lng)
    return [
        _occurrence(d, k, sample, kshaya, cfg)
        for d, k, sample, kshaya in _scan_year(year, coord, cfg)
        if k == tithi_index
    ]
