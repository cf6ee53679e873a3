from __future__ import annotations

import bisect
import logging
import os
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path
from typing import List, Tuple

from ..core.errors import LeapSecondTableError

log = logging.getLogger(__name__)

SCALES = ("UTC", "TAI", "TT", "GPS")

TT_MINUS_TAI = 32.184  # seconds
TAI_MINUS_GPS = 19.0   # seconds

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_JD_NTP_EPOCH = 2415020.5   # JD at 1900-01-01 00:00:00 UTC
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ============================================================
# Gregorian calendar date <-> JDN  (Fliegel-Van Flandern)
# ============================================================

def date_to_jdn(d: date) -> int:
    """Gregorian date -> JDN (proleptic Gregorian)."""
    a = (14 - d.month) // 12
    y2 = d.year + 4800 - a
    m2 = d.month + 12 * a - 3
    return d.day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_date(jdn: int) -> date:
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)


def date_to_jd(d: date) -> float:
    """JD at 0h UTC of a civil date."""
    return date_to_jdn(d) - 0.5


# ============================================================
# Leap seconds (TAI - UTC)
# ============================================================

# (first day in force, TAI-UTC seconds)
_EMBEDDED_LEAP_SECONDS: Tuple[Tuple[date, int], ...] = (
    (date(1972, 1, 1), 10),
    (date(1972, 7, 1), 11),
    (date(1973, 1, 1), 12),
    (date(1974, 1, 1), 13),
    (date(1975, 1, 1), 14),
    (date(1976, 1, 1), 15),
    (date(1977, 1, 1), 16),
    (date(1978, 1, 1), 17),
    (date(1979, 1, 1), 18),
    (date(1980, 1, 1), 19),
    (date(1981, 7, 1), 20),
    (date(1982, 7, 1), 21),
    (date(1983, 7, 1), 22),
    (date(1985, 7, 1), 23),
    (date(1988, 1, 1), 24),
    (date(1990, 1, 1), 25),
    (date(1991, 1, 1), 26),
    (date(1992, 7, 1), 27),
    (date(1993, 7, 1), 28),
    (date(1994, 7, 1), 29),
    (date(1996, 1, 1), 30),
    (date(1997, 7, 1), 31),
    (date(1999, 1, 1), 32),
    (date(2006, 1, 1), 33),
    (date(2009, 1, 1), 34),
    (date(2012, 7, 1), 35),
    (date(2015, 7, 1), 36),
    (date(2017, 1, 1), 37),
)

GPS_EPOCH_JD = date_to_jd(date(1980, 1, 6))


def parse_leap_seconds_list(text: str) -> List[Tuple[float, int]]:
    """
    Parse an IETF/IERS `leap-seconds.list` body into (JD(UTC), TAI-UTC) pairs.

    Data lines are `<NTP seconds> <TAI-UTC> [# comment]`; lines starting
    with '#' are comments.
    """
    rows: List[Tuple[float, int]] = []
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        parts = line.split()
        if len(parts) < 2:
            raise LeapSecondTableError(f"line {lineno}: expected '<ntp seconds> <offset>'")
        try:
            ntp = int(parts[0])
            offset = int(parts[1])
        except ValueError as e:
            raise LeapSecondTableError(f"line {lineno}: {raw.strip()!r}") from e
        rows.append((_JD_NTP_EPOCH + ntp / 86400.0, offset))
    if not rows:
        raise LeapSecondTableError("no leap-second entries found")
    rows.sort()
    return rows


def _embedded_table() -> List[Tuple[float, int]]:
    return [(date_to_jd(d), off) for d, off in _EMBEDDED_LEAP_SECONDS]


@lru_cache(maxsize=1)
def leap_second_table() -> Tuple[Tuple[float, ...], Tuple[int, ...]]:
    """
    Load the leap-second table.

    Search order:
      1) env PANCHANGAM_LEAP_SECONDS (path to a leap-seconds.list file)
      2) embedded table (through 2017-01-01, 37 s)
    """
    rows = None
    env = os.environ.get("PANCHANGAM_LEAP_SECONDS")
    if env:
        try:
            rows = parse_leap_seconds_list(Path(env).read_text(encoding="utf-8"))
            log.debug("loaded %d leap-second entries from %s", len(rows), env)
        except (OSError, LeapSecondTableError) as e:
            log.warning("cannot use leap-second table %s (%s); using embedded table", env, e)
            rows = None
    if rows is None:
        rows = _embedded_table()
    return tuple(r[0] for r in rows), tuple(r[1] for r in rows)


def tai_minus_utc(jd_utc: float) -> float:
    """TAI-UTC in seconds. Zero before 1972 (pre-leap-second UTC is not modelled)."""
    starts, offsets = leap_second_table()
    i = bisect.bisect_right(starts, jd_utc)
    if i == 0:
        return 0.0
    return float(offsets[i - 1])


def jd_utc_to_jd_tt(jd_utc: float) -> float:
    return jd_utc + (tai_minus_utc(jd_utc) + TT_MINUS_TAI) / 86400.0


# ============================================================
# datetime <-> JD in a named scale
# ============================================================

def _check_scale(scale: str) -> str:
    s = scale.upper()
    if s not in SCALES:
        raise ValueError(f"scale must be one of {SCALES}, got {scale!r}")
    return s


def datetime_to_jd_utc(dt: datetime) -> float:
    """datetime -> JD(UTC). Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt.astimezone(timezone.utc) - _UNIX_EPOCH
    return _JD_UNIX_EPOCH + delta / timedelta(days=1)


def jd_utc_to_datetime(jd: float) -> datetime:
    return _UNIX_EPOCH + timedelta(days=jd - _JD_UNIX_EPOCH)


def _scale_offset_seconds(jd_utc: float, scale: str) -> float:
    """Seconds to add to UTC to obtain `scale`."""
    if scale == "UTC":
        return 0.0
    tai = tai_minus_utc(jd_utc)
    if scale == "TAI":
        return tai
    if scale == "TT":
        return tai + TT_MINUS_TAI
    # GPS time only exists from its epoch on; earlier instants stay in UTC
    if jd_utc < GPS_EPOCH_JD:
        return 0.0
    return tai - TAI_MINUS_GPS


def to_julian_date(dt: datetime, scale: str = "UTC") -> float:
    """
    Julian Date of a UTC instant expressed in the requested time scale.

    scale: 'UTC' | 'TAI' | 'TT' | 'GPS'
    """
    s = _check_scale(scale)
    jd_utc = datetime_to_jd_utc(dt)
    return jd_utc + _scale_offset_seconds(jd_utc, s) / 86400.0


def from_julian_date(jd: float, scale: str = "UTC") -> datetime:
    """Inverse of to_julian_date: timezone-aware UTC datetime."""
    s = _check_scale(scale)
    jd_utc = jd
    # two fixed-point passes settle the offset across a leap-second step
    for _ in range(2):
        jd_utc = jd - _scale_offset_seconds(jd_utc, s) / 86400.0
    return jd_utc_to_datetime(jd_utc)


# ============================================================
# Local civil / mean time helpers
# ============================================================

def lmt_offset_hours(longitude_deg_east: float) -> float:
    """360 deg -> 24 h, east positive."""
    return longitude_deg_east / 15.0


def local_midnight_jd(d: date, offset_hours: float) -> float:
    """JD(UTC) of 00:00 local time on civil date d at a fixed UTC offset."""
    return date_to_jd(d) - offset_hours / 24.0


def fixed_zone(offset_hours: float) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def utc_to_local(dt_utc: datetime, offset_hours: float) -> datetime:
    """UTC -> aware local datetime at a fixed offset."""
    if dt_utc.tzinfo is None:
        raise ValueError("dt_utc must be timezone-aware UTC")
    return dt_utc.astimezone(fixed_zone(offset_hours))


def local_to_utc(dt_local: datetime, offset_hours: float) -> datetime:
    """Naive local -> aware UTC; aware datetimes keep their own zone."""
    if dt_local.tzinfo is not None:
        return dt_local.astimezone(timezone.utc)
    return (dt_local - timedelta(hours=offset_hours)).replace(tzinfo=timezone.utc)
