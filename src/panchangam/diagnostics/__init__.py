"""Diagnostics package.

- diagnostics.tithi_plot: elongation and tithi boundaries over a span (matplotlib)
- diagnostics.ephem: optional (requires ephemeris extras + a JPL kernel)
"""

__all__ = ["tithi_plot"]
