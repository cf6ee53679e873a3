# tests/test_astro_args.py

import pytest
from panchangam.astro import args as aa

def test_meeus_example_47a_lunar_fundamentals():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 47.a.
    1992 April 12, 0h TD, JD 2448724.5.
    """
    T = aa.T_centuries(2448724.5)
    assert T == pytest.approx(-0.077221081451, abs=1e-12)

    fa = aa.fundamental_args(T)
    assert fa.Lp_deg == pytest.approx(134.290182, abs=1e-6)
    assert fa.D_deg  == pytest.approx(113.842304, abs=1e-6)
    assert fa.M_deg  == pytest.approx(97.643514, abs=1e-6)
    assert fa.Mp_deg == pytest.approx(5.150833, abs=1e-6)
    assert fa.F_deg  == pytest.approx(219.889721, abs=1e-6)

    assert aa.eccentricity_factor(T) == pytest.approx(1.000194, abs=1e-6)

def test_meeus_example_25a_solar_mean_elements():
    """Example 25.a: 1992 October 13, 0h TD."""
    T = aa.T_centuries(2448908.5)
    sm = aa.solar_mean_elements(T)
    assert sm.L0_deg == pytest.approx(201.80720, abs=1e-5)
    assert sm.M_deg == pytest.approx(278.99397, abs=1e-5)

def test_wrapping():
    assert aa.wrap_deg(-30.0) == pytest.approx(330.0)
    assert aa.wrap_deg(725.0) == pytest.approx(5.0)
    assert aa.wrap180(190.0) == pytest.approx(-170.0)
    assert aa.wrap180(-190.0) == pytest.approx(170.0)

def test_mean_new_moon_k0_is_2000_jan_6():
    # first new moon of 2000: January 6, ~18:14 TT
    assert aa.jde_mean_new_moon(0) == pytest.approx(2451550.09766, abs=1e-6)
    assert aa.jde_mean_new_moon(1) - aa.jde_mean_new_moon(0) == pytest.approx(29.530588861, abs=1e-6)
