from __future__ import annotations

import math
from typing import Callable

from ..astro.args import wrap180
from ..core.types import Converged, Estimate, NotConverged

# half-width of the central difference (days)
_H = 1.0 / 96.0


def solve_angle(
    f: Callable[[float], float],
    target_deg: float,
    *,
    t0: float,
    rate: float,
    tol: float,
    max_iter: int,
) -> Estimate:
    """
    Newton iteration for f(t) = target (mod 360).

    f is an angle in degrees of a JD argument; `rate` (deg/day) is the
    fallback slope when the numerical derivative degenerates. The residual is
    wrapped to [-180, 180) so that targets near 0/360 behave.
    """
    t = t0
    for n in range(1, max_iter + 1):
        r = wrap180(f(t) - target_deg)
        d = wrap180(f(t + _H) - f(t - _H)) / (2.0 * _H)
        if not math.isfinite(d) or abs(d) < 1e-6:
            d = rate
        step = -r / d
        t += step
        if abs(step) < tol:
            return Converged(jd=t, iterations=n)
    return NotConverged(jd=t, iterations=max_iter)
