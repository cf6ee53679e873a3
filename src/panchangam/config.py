"""Engine configuration.

A frozen value passed explicitly to the engines; `DEFAULT_CONFIG` is used when
callers do not supply one. `EngineConfig.from_env()` builds one from the
PANCHANGAM_* environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .core.errors import ConfigError

AYANAMSA_MODELS = ("lahiri", "tropical")
MONTH_SCHEMES = ("amanta", "purnimanta")
MOON_SERIES = ("full", "low")


@dataclass(frozen=True)
class EngineConfig:
    ayanamsa: str = "lahiri"
    month_scheme: str = "amanta"
    moon_series: str = "full"
    tz_offset_hours: float = 5.5  # IST

    # rise/set iteration: 10 s, at most 10 steps
    rise_tolerance_days: float = 10.0 / 86400.0
    rise_max_iter: int = 10

    # element boundary iteration: 1 s, at most 20 steps
    boundary_tolerance_days: float = 1.0 / 86400.0
    boundary_max_iter: int = 20

    def __post_init__(self) -> None:
        if self.ayanamsa not in AYANAMSA_MODELS:
            raise ConfigError(f"ayanamsa must be one of {AYANAMSA_MODELS}, got {self.ayanamsa!r}")
        if self.month_scheme not in MONTH_SCHEMES:
            raise ConfigError(f"month_scheme must be one of {MONTH_SCHEMES}, got {self.month_scheme!r}")
        if self.moon_series not in MOON_SERIES:
            raise ConfigError(f"moon_series must be one of {MOON_SERIES}, got {self.moon_series!r}")
        if not -14.0 <= self.tz_offset_hours <= 14.0:
            raise ConfigError(f"tz_offset_hours {self.tz_offset_hours} outside [-14, 14]")
        if self.rise_max_iter < 1 or self.boundary_max_iter < 1:
            raise ConfigError("iteration caps must be positive")
        if self.rise_tolerance_days <= 0 or self.boundary_tolerance_days <= 0:
            raise ConfigError("tolerances must be positive")

    def with_(self, **changes) -> "EngineConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        kw = {}
        if env.get("PANCHANGAM_AYANAMSA"):
            kw["ayanamsa"] = env["PANCHANGAM_AYANAMSA"].strip().lower()
        if env.get("PANCHANGAM_MONTH_SCHEME"):
            kw["month_scheme"] = env["PANCHANGAM_MONTH_SCHEME"].strip().lower()
        if env.get("PANCHANGAM_MOON_SERIES"):
            kw["moon_series"] = env["PANCHANGAM_MOON_SERIES"].strip().lower()
        if env.get("PANCHANGAM_TZ_OFFSET"):
            try:
                kw["tz_offset_hours"] = float(env["PANCHANGAM_TZ_OFFSET"])
            except ValueError as e:
                raise ConfigError(f"PANCHANGAM_TZ_OFFSET is not a number: {env['PANCHANGAM_TZ_OFFSET']!r}") from e
        return cls(**kw)


DEFAULT_CONFIG = EngineConfig()
