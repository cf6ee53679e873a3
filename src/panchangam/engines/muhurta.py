"""Auspicious and inauspicious windows from a day's sunrise/sunset.

Each window is a run of equal slots of the daytime (or night-time) span,
picked from a fixed table keyed by weekday or nakshatra. Varjyam is also
available in its nakshatra-proportional form (`varjyam_period`).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional, Tuple, Union

from . import names as nm
from ..core.types import Element, TimeWindow

TimeLike = Union[datetime, str]
Weekday = Union[str, int, None]

# 8-way division of the day: (rahu, gulika, yamaganda) starting slots
KALAM_SLOTS: Dict[str, Tuple[int, int, int]] = {
    "monday": (1, 5, 3),
    "tuesday": (6, 4, 2),
    "wednesday": (4, 3, 1),
    "thursday": (5, 2, 0),
    "friday": (3, 1, 6),
    "saturday": (2, 0, 5),
    "sunday": (7, 6, 4),
}
DEFAULT_KALAM_SLOTS = KALAM_SLOTS["monday"]

# 15-way division of the day
DURMUHURTAM_SLOTS: Dict[str, Tuple[int, ...]] = {
    "monday": (8, 11),
    "tuesday": (3, 6),
    "wednesday": (7,),
    "thursday": (5, 11),
    "friday": (3, 8),
    "saturday": (2,),
    "sunday": (13,),
}
DEFAULT_DURMUHURTAM_SLOTS = (5,)

ABHIJIT_SLOT = 7  # of 15

# 30-way division of the day
VARJYAM_SLOTS: Dict[str, int] = {
    "magha": 8,
}
DEFAULT_VARJYAM_SLOT = 5

# tyajya: ghatis into a 60-ghati nakshatra at which its varjyam starts
VARJYAM_START_GHATI: Dict[str, float] = {
    "ashwini": 50, "bharani": 24, "krittika": 30, "rohini": 40, "mrigashira": 14,
    "ardra": 11, "punarvasu": 30, "pushya": 20, "ashlesha": 32, "magha": 30,
    "purva_phalguni": 20, "uttara_phalguni": 18, "hasta": 21, "chitra": 20,
    "swati": 14, "vishakha": 14, "anuradha": 10, "jyeshtha": 14, "mula": 20,
    "purva_ashadha": 24, "uttara_ashadha": 20, "shravana": 10, "dhanishtha": 10,
    "shatabhisha": 18, "purva_bhadrapada": 16, "uttara_bhadrapada": 24, "revati": 30,
}
VARJYAM_GHATIS = 4.0
NAKSHATRA_GHATIS = 60.0

PRADOSHA_SLOT = 0  # of 5, night

BRAHMA_LEAD = timedelta(minutes=96)
BRAHMA_LENGTH = timedelta(minutes=48)

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?\s*$")


def parse_time(value: TimeLike, base: Optional[datetime] = None) -> datetime:
    """
    Accept a datetime, or 'hh:mm AM'/'hh:mm PM'/'HH:MM' on the date of `base`
    (1900-01-01 when not given).
    """
    if isinstance(value, datetime):
        return value
    m = _TIME_RE.match(value)
    if not m:
        raise ValueError(f"unrecognized time {value!r}; expected 'hh:mm AM' or 'HH:MM'")
    h, mi, s, ampm = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0), m.group(4)
    if ampm:
        if not 1 <= h <= 12:
            raise ValueError(f"hour out of range in {value!r}")
        h = h % 12 + (12 if ampm.lower() == "pm" else 0)
    if h > 23 or mi > 59 or s > 59:
        raise ValueError(f"time out of range in {value!r}")
    day = base if base is not None else datetime(1900, 1, 1)
    return day.replace(hour=h, minute=mi, second=s, microsecond=0)


def span(start: TimeLike, end: TimeLike) -> Tuple[datetime, datetime]:
    """Parse both ends; an end that is not after its start is on the next day."""
    t0 = parse_time(start)
    t1 = parse_time(end, base=t0 if isinstance(end, str) else None)
    if isinstance(end, str) and t1 <= t0:
        t1 += timedelta(days=1)
    if t1 <= t0:
        raise ValueError("end must be after start")
    return t0, t1


def slot(start: datetime, end: datetime, n: int, first: int, last: int) -> TimeWindow:
    """Window from slot boundary `first` to slot boundary `last` of an n-way division."""
    step = (end - start) / n
    return TimeWindow(start=start + step * first, end=start + step * last)


@dataclass(frozen=True)
class KalamWindows:
    rahu: TimeWindow
    gulika: TimeWindow
    yamaganda: TimeWindow


def rahu_kalam(sunrise: TimeLike, sunset: TimeLike, weekday: Weekday) -> KalamWindows:
    t0, t1 = span(sunrise, sunset)
    key = nm.canonical_weekday(weekday)
    r, g, y = KALAM_SLOTS.get(key, DEFAULT_KALAM_SLOTS) if key else DEFAULT_KALAM_SLOTS
    return KalamWindows(
        rahu=slot(t0, t1, 8, r, r + 1),
        gulika=slot(t0, t1, 8, g, g + 1),
        yamaganda=slot(t0, t1, 8, y, y + 1),
    )


def abhijit_muhurtham(sunrise: TimeLike, sunset: TimeLike) -> TimeWindow:
    t0, t1 = span(sunrise, sunset)
    return slot(t0, t1, 15, ABHIJIT_SLOT, ABHIJIT_SLOT + 1)


def brahma_muhurtham(sunrise: TimeLike) -> TimeWindow:
    t = parse_time(sunrise)
    return TimeWindow(start=t - BRAHMA_LEAD, end=t - BRAHMA_LEAD + BRAHMA_LENGTH)


def dur_muhurtham(sunrise: TimeLike, sunset: TimeLike, weekday: Weekday) -> Tuple[TimeWindow, ...]:
    t0, t1 = span(sunrise, sunset)
    key = nm.canonical_weekday(weekday)
    slots = DURMUHURTAM_SLOTS.get(key, DEFAULT_DURMUHURTAM_SLOTS) if key else DEFAULT_DURMUHURTAM_SLOTS
    return tuple(slot(t0, t1, 15, s, s + 1) for s in slots)


def varjyam(sunrise: TimeLike, sunset: TimeLike, nakshatra: Optional[str]) -> TimeWindow:
    t0, t1 = span(sunrise, sunset)
    s = VARJYAM_SLOTS.get(nm.canonical_nakshatra(nakshatra) or "", DEFAULT_VARJYAM_SLOT)
    return slot(t0, t1, 30, s, s + 1)


def varjyam_period(nakshatra: Union[str, int], start: datetime, end: datetime) -> Optional[TimeWindow]:
    """
    Varjyam inside one nakshatra running from `start` to `end`.

    The nakshatra is read as 60 ghatis of equal length; varjyam begins at the
    nakshatra's tyajya ghati and lasts 4 of those ghatis (96 minutes for a
    24-hour nakshatra). `nakshatra` is a name/alias or an index 0..26.
    Returns None for an unknown nakshatra.
    """
    if isinstance(nakshatra, int) and not isinstance(nakshatra, bool):
        key = nm.NAKSHATRA_KEYS[nakshatra] if 0 <= nakshatra < 27 else None
    else:
        key = nm.canonical_nakshatra(nakshatra)
    if key is None:
        return None
    if end <= start:
        raise ValueError("nakshatra end must be after its start")
    ghati = (end - start) / NAKSHATRA_GHATIS
    t0 = start + ghati * VARJYAM_START_GHATI[key]
    return TimeWindow(start=t0, end=t0 + ghati * VARJYAM_GHATIS)


def varjyam_periods(
    nakshatras: Iterable[Element],
    day_start: datetime,
    day_end: datetime,
) -> Tuple[TimeWindow, ...]:
    """Varjyam of each nakshatra span that overlaps [day_start, day_end), in time order."""
    out = []
    for e in nakshatras:
        w = varjyam_period(e.index, e.start, e.end)
        if w is not None and w.start < day_end and w.end > day_start and w not in out:
            out.append(w)
    return tuple(sorted(out, key=lambda w: w.start))


def pradosha_time(sunset: TimeLike, next_sunrise: TimeLike) -> TimeWindow:
    t0, t1 = span(sunset, next_sunrise)
    return slot(t0, t1, 5, PRADOSHA_SLOT, PRADOSHA_SLOT + 1)


def good_bad_times(
    sunrise: TimeLike,
    sunset: TimeLike,
    next_sunrise: TimeLike,
    weekday: Weekday,
    nakshatra: Optional[str] = None,
) -> Tuple[Tuple[str, Tuple[TimeWindow, ...]], ...]:
    """All windows of one day as (name, windows) pairs."""
    k = rahu_kalam(sunrise, sunset, weekday)
    return (
        ("brahma_muhurtham", (brahma_muhurtham(sunrise),)),
        ("abhijit_muhurtham", (abhijit_muhurtham(sunrise, sunset),)),
        ("rahu_kalam", (k.rahu,)),
        ("gulika_kalam", (k.gulika,)),
        ("yamaganda", (k.yamaganda,)),
        ("dur_muhurtham", dur_muhurtham(sunrise, sunset, weekday)),
        ("varjyam", (varjyam(sunrise, sunset, nakshatra),)),
        ("pradosha", (pradosha_time(sunset, next_sunrise),)),
    )
