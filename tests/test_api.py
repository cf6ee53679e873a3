# tests/test_api.py

from datetime import date, datetime, timezone

import pytest

import panchangam
from panchangam import cli

HYD = (17.385, 78.4867)


def test_daily_hyderabad():
    d = panchangam.daily(date(2025, 10, 21), HYD)
    assert d.sunrise is not None and d.sunset is not None
    assert d.sunrise < d.sunset < d.next_sunrise
    assert d.sunrise.utcoffset().total_seconds() == 5.5 * 3600
    assert 5 <= d.sunrise.hour <= 6
    assert d.panchangam.vara == "Tuesday"
    assert d.panchangam.tithi.index == 29
    names = [n for n, _ in panchangam.good_bad_times(d)]
    assert "rahu_kalam" in names
    rahu = d.window("rahu_kalam")[0]
    assert d.sunrise <= rahu.start < rahu.end <= d.sunset
    with pytest.raises(KeyError):
        d.window("nonexistent")

def test_calculate_accepts_tuple_or_coordinate():
    t = datetime(2025, 1, 1, tzinfo=timezone.utc)
    a = panchangam.calculate(t, HYD)
    b = panchangam.calculate(t, panchangam.GeographicCoordinate(*HYD))
    assert a == b

def test_calculate_rejects_bad_coordinate():
    with pytest.raises(panchangam.CoordinateError):
        panchangam.calculate(datetime(2025, 1, 1), (123.0, 0.0))

def test_to_julian_date_reexport():
    assert panchangam.to_julian_date(datetime(2000, 1, 1, 12)) == pytest.approx(2451545.0)

def test_cli_rise_set(capsys):
    assert cli.main(["rise-set", "2025-01-01", "--lat", "17.385", "--lon", "78.4867"]) == 0
    out = capsys.readouterr().out
    assert "rise" in out and "set" in out

def test_cli_find(capsys):
    assert cli.main(["find", "2025", "karthika", "krishna", "amavasya"]) == 0
    assert "2025-" in capsys.readouterr().out

def test_cli_find_no_match(capsys):
    assert cli.main(["find", "2025", "smarch", "krishna", "amavasya"]) == 1

def test_cli_positions(capsys):
    assert cli.main(["positions", "--jd-utc", "2451545.0"]) == 0
    assert "GMST" in capsys.readouterr().out

def test_cli_day_shorthand(capsys):
    assert cli.main(["2025-01-01"]) == 0
    out = capsys.readouterr().out
    assert "Tithi" in out and "rahu_kalam" in out

def test_daily_includes_nakshatra_varjyam():
    found = []
    for day in (date(2025, 10, 1), date(2025, 10, 2), date(2025, 10, 3)):
        d = panchangam.daily(day, HYD)
        # the slot form is still there
        assert len(d.window("varjyam")) == 1
        for w in d.window("varjyam_periods"):
            assert w.start.utcoffset().total_seconds() == 5.5 * 3600
            assert 70 <= w.duration.total_seconds() / 60.0 <= 115
            assert w.start.date() <= day <= w.end.date()
            found.append(w)
    # three days hold at least two whole nakshatras
    assert len(set(found)) >= 2

def test_cli_eclipses(capsys):
    assert cli.main(["eclipses", "2025"]) == 0
    out = capsys.readouterr().out
    assert out.count("Eclipse") == 4
    assert "Total Lunar Eclipse" in out

def test_eclipse_reexports():
    assert [e.kind for e in panchangam.eclipses(2025)] == ["lunar", "solar", "lunar", "solar"]
    assert panchangam.next_eclipse(datetime(2025, 1, 1, tzinfo=timezone.utc)).peak.month == 3
