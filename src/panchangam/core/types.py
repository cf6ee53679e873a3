from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

from .errors import CoordinateError

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC

# WGS-84
_WGS84_FLATTENING = 0.003352810664747


def _jd_to_utc(jd: float) -> datetime:
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(days=jd - _JD_UNIX_EPOCH)


@dataclass(frozen=True)
class GeographicCoordinate:
    """Observer position. Latitude north positive, longitude east positive (degrees)."""
    latitude: float
    longitude: float
    height_m: float = 0.0

    def __post_init__(self) -> None:
        lat, lon = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lon) and math.isfinite(self.height_m)):
            raise CoordinateError(f"non-finite coordinate: lat={lat!r}, lon={lon!r}")
        if not -90.0 <= lat <= 90.0:
            raise CoordinateError(f"latitude {lat} outside [-90, 90]")
        if not -180.0 <= lon <= 180.0:
            raise CoordinateError(f"longitude {lon} outside [-180, 180]")

    def geocentric_latitude_deg(self) -> float:
        """Geocentric latitude on the WGS-84 ellipsoid (degrees)."""
        one_f = 1.0 - _WGS84_FLATTENING
        return math.degrees(math.atan(one_f * one_f * math.tan(math.radians(self.latitude))))


@dataclass(frozen=True)
class EclipticPosition:
    longitude: float  # degrees, [0, 360)
    latitude: float   # degrees


@dataclass(frozen=True)
class EquatorialPosition:
    right_ascension: float  # radians, (-pi, pi]
    declination: float      # radians


# ------------------------------------------------------------
# Iterative estimates: either converged or the last iterate
# ------------------------------------------------------------

@dataclass(frozen=True)
class Converged:
    jd: float  # JD(UTC)
    iterations: int

    converged = True

    @property
    def utc(self) -> datetime:
        return _jd_to_utc(self.jd)


@dataclass(frozen=True)
class NotConverged:
    jd: float  # JD(UTC) of the last iterate
    iterations: int

    converged = False

    @property
    def utc(self) -> datetime:
        return _jd_to_utc(self.jd)


Estimate = Union[Converged, NotConverged]


# ------------------------------------------------------------
# Panchangam elements
# ------------------------------------------------------------

@dataclass(frozen=True)
class Element:
    """One limb of the panchangam prevailing at an instant, with its span (UTC)."""
    kind: str
    index: int
    name: str
    start: datetime
    end: datetime
    converged: bool = True

    def contains(self, t: datetime) -> bool:
        return self.start <= t < self.end


@dataclass(frozen=True)
class Masa:
    index: int  # 0 = Chaitra
    name: str
    is_adhika: bool = False

    @property
    def label(self) -> str:
        return f"adhika {self.name}" if self.is_adhika else self.name


@dataclass(frozen=True)
class Paksha:
    index: int  # 0 = shukla, 1 = krishna
    name: str


@dataclass(frozen=True)
class CalculatedPanchangam:
    instant: datetime
    vara: str
    tithi: Element
    paksha: Paksha
    nakshatra: Element
    yoga: Element
    karana: Element
    masa: Masa
    raasi: str
    ritu: str
    ayana: str
    samvatsara: str
    gana: str              # of the nakshatra
    guna: str              # of the raasi
    trinity: str           # of the nakshatra
    drik_ritu: str         # from the Sun's sidereal longitude
    sun_longitude: float   # tropical, degrees
    moon_longitude: float  # tropical, degrees
    ayanamsa: float        # degrees


@dataclass(frozen=True)
class RiseSetResult:
    body: str
    day: date
    rise: Optional[Estimate]
    set: Optional[Estimate]

    @property
    def rise_utc(self) -> Optional[datetime]:
        return None if self.rise is None else self.rise.utc

    @property
    def set_utc(self) -> Optional[datetime]:
        return None if self.set is None else self.set.utc


@dataclass(frozen=True)
class TithiOccurrence:
    gregorian_date: date
    tithi_index: int  # 0..29
    start: datetime
    end: datetime
    masa: Masa
    paksha: Paksha
    kshaya: bool = False  # skipped tithi attributed to this date


@dataclass(frozen=True)
class EclipseEvent:
    kind: str        # 'solar' | 'lunar'
    type: str        # 'total' | 'annular' | 'hybrid' | 'partial' | 'penumbral'
    peak: datetime   # greatest eclipse, UTC
    jde: float       # greatest eclipse, JD(TT)
    gamma: float     # least distance of the shadow axis from Earth's centre, Earth radii
    magnitude: Optional[float] = None  # partial solar; umbral (or penumbral) lunar

    @property
    def display_name(self) -> str:
        return f"{self.type.title()} {self.kind.title()} Eclipse"


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def format(self) -> str:
        """'hh:mm AM - hh:mm PM' in the datetimes' own wall-clock time."""
        return f"{self.start.strftime('%I:%M %p')} - {self.end.strftime('%I:%M %p')}"


@dataclass(frozen=True)
class DailyPanchangam:
    day: date
    coordinate: GeographicCoordinate
    tz_offset_hours: float
    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    next_sunrise: Optional[datetime]
    moonrise: Optional[datetime]
    moonset: Optional[datetime]
    panchangam: CalculatedPanchangam
    windows: Tuple[Tuple[str, Tuple[TimeWindow, ...]], ...] = ()

    def window(self, name: str) -> Tuple[TimeWindow, ...]:
        for key, w in self.windows:
            if key == name:
                return w
        raise KeyError(name)
