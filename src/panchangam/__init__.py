"""panchangam public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    calculate,
    daily,
    rise_set,
    find_date_by_tithi,
    find_all_dates_by_tithi,
    find_tithi_occurrences,
    tithi_dates,
    good_bad_times,
    eclipses,
    next_eclipse,
)
from .astro.time_scales import to_julian_date, from_julian_date
from .config import EngineConfig, DEFAULT_CONFIG
from .core.errors import PanchangamError, CoordinateError, ConfigError
from .core.types import (
    GeographicCoordinate,
    CalculatedPanchangam,
    DailyPanchangam,
    EclipseEvent,
    RiseSetResult,
    TithiOccurrence,
    TimeWindow,
    Converged,
    NotConverged,
)

__all__ = [
    "calculate",
    "daily",
    "rise_set",
    "find_date_by_tithi",
    "find_all_dates_by_tithi",
    "find_tithi_occurrences",
    "tithi_dates",
    "good_bad_times",
    "eclipses",
    "next_eclipse",
    "to_julian_date",
    "from_julian_date",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "PanchangamError",
    "CoordinateError",
    "ConfigError",
    "GeographicCoordinate",
    "CalculatedPanchangam",
    "DailyPanchangam",
    "EclipseEvent",
    "RiseSetResult",
    "TithiOccurrence",
    "TimeWindow",
    "Converged",
    "NotConverged",
]
