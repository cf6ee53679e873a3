from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from datetime import date, datetime, timezone
from typing import Optional

from .config import EngineConfig

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """Import module and run its main(argv) or main()."""
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")
    rv = fn() if len(inspect.signature(fn).parameters) == 0 else fn(argv)
    return int(rv or 0)


def _add_location(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, default=17.385, help="latitude, north positive (default: Hyderabad)")
    p.add_argument("--lon", type=float, default=78.4867, help="longitude, east positive (default: Hyderabad)")
    p.add_argument("--tz", type=float, default=None, help="UTC offset in hours (default: PANCHANGAM_TZ_OFFSET or 5.5)")
    p.add_argument("-v", "--verbose", action="store_true")


def _config(args) -> EngineConfig:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    cfg = EngineConfig.from_env()
    if args.tz is not None:
        cfg = cfg.with_(tz_offset_hours=args.tz)
    return cfg


def _fmt(t: Optional[datetime]) -> str:
    return "-" if t is None else t.strftime("%Y-%m-%d %I:%M:%S %p")


def _print_panchangam(p, tz: float) -> None:
    from .astro.time_scales import utc_to_local

    def el(e) -> str:
        flag = "" if e.converged else "  (not converged)"
        return f"{e.name:<18s} {_fmt(utc_to_local(e.start, tz))}  ->  {_fmt(utc_to_local(e.end, tz))}{flag}"

    print(f"  Vara        {p.vara}")
    print(f"  Tithi       {p.paksha.name} {el(p.tithi)}")
    print(f"  Nakshatra   {el(p.nakshatra)}")
    print(f"  Yoga        {el(p.yoga)}")
    print(f"  Karana      {el(p.karana)}")
    print(f"  Masa        {p.masa.label}")
    print(f"  Raasi       {p.raasi}")
    print(f"  Ritu        {p.ritu} (drik {p.drik_ritu})")
    print(f"  Ayana       {p.ayana}")
    print(f"  Samvatsara  {p.samvatsara}")
    print(f"  Gana {p.gana}  Guna {p.guna}  Trinity {p.trinity}")
    print(f"  Sun {p.sun_longitude:.4f}  Moon {p.moon_longitude:.4f}  Ayanamsa {p.ayanamsa:.4f} (deg)")


def cmd_day(argv: list[str]) -> int:
    from . import api

    p = argparse.ArgumentParser(prog="panchangam day", description="Daily panchangam at sunrise, with windows")
    p.add_argument("date", help="YYYY-MM-DD")
    _add_location(p)
    args = p.parse_args(argv)
    cfg = _config(args)

    d = api.daily(_parse_ymd(args.date), (args.lat, args.lon), config=cfg)
    print(f"{d.day.isoformat()}  lat={args.lat} lon={args.lon}  UTC{cfg.tz_offset_hours:+g}")
    print(f"  Sunrise {_fmt(d.sunrise)}   Sunset {_fmt(d.sunset)}")
    print(f"  Moonrise {_fmt(d.moonrise)}   Moonset {_fmt(d.moonset)}")
    _print_panchangam(d.panchangam, cfg.tz_offset_hours)
    for name, windows in d.windows:
        print(f"  {name:<18s} " + (", ".join(w.format() for w in windows) or "-"))
    return 0


def cmd_at(argv: list[str]) -> int:
    from . import api

    p = argparse.ArgumentParser(prog="panchangam at", description="Panchangam at an instant")
    p.add_argument("instant", help="YYYY-MM-DDTHH:MM[:SS][+HH:MM]; naive values are local time at --tz")
    _add_location(p)
    args = p.parse_args(argv)
    cfg = _config(args)

    from .astro.time_scales import local_to_utc
    t = local_to_utc(datetime.fromisoformat(args.instant), cfg.tz_offset_hours)
    _print_panchangam(api.calculate(t, (args.lat, args.lon), config=cfg), cfg.tz_offset_hours)
    return 0


def cmd_rise_set(argv: list[str]) -> int:
    from . import api
    from .astro.time_scales import utc_to_local

    p = argparse.ArgumentParser(prog="panchangam rise-set", description="Sun or Moon rise and set")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--body", choices=["sun", "moon"], default="sun")
    _add_location(p)
    args = p.parse_args(argv)
    cfg = _config(args)

    r = api.rise_set(_parse_ymd(args.date), (args.lat, args.lon), args.body, tz_offset_hours=cfg.tz_offset_hours, config=cfg)
    for label, est in (("rise", r.rise), ("set", r.set)):
        if est is None:
            print(f"  {label:4s}  none")
        else:
            note = "" if est.converged else "  (not converged)"
            print(f"  {label:4s}  {_fmt(utc_to_local(est.utc, cfg.tz_offset_hours))}  JD {est.jd:.6f}  [{est.iterations} it]{note}")
    return 0


def cmd_find(argv: list[str]) -> int:
    from . import api

    p = argparse.ArgumentParser(prog="panchangam find", description="Dates of a masa/paksha/tithi in a year")
    p.add_argument("year", type=int)
    p.add_argument("masa")
    p.add_argument("paksha")
    p.add_argument("tithi")
    p.add_argument("--all", action="store_true", help="list every occurrence")
    _add_location(p)
    args = p.parse_args(argv)
    cfg = _config(args)

    occ = api.find_tithi_occurrences(args.year, args.masa, args.paksha, args.tithi, args.lat, args.lon, config=cfg)
    if not occ:
        print("no match")
        return 1
    for o in occ if args.all else occ[:1]:
        flag = "  (kshaya)" if o.kshaya else ""
        print(f"  {o.gregorian_date.isoformat()}  {o.masa.label} {o.paksha.name} tithi {o.tithi_index % 15 + 1}{flag}")
    return 0


def cmd_positions(argv: list[str]) -> int:
    import math
    from .astro import args as aa
    from .astro import lunar, positions, time_scales as ts
    from .astro.sidereal import gmst_deg

    p = argparse.ArgumentParser(prog="panchangam positions", description="Sun/Moon ecliptic and equatorial coordinates")
    p.add_argument("--jd-utc", type=float, default=None, help="JD(UTC) (default: now)")
    p.add_argument("--series", choices=["full", "low"], default="full")
    args = p.parse_args(argv)

    jd = args.jd_utc if args.jd_utc is not None else ts.datetime_to_jd_utc(datetime.now(timezone.utc))
    jd_tt = ts.jd_utc_to_jd_tt(jd)
    T = aa.T_centuries(jd_tt)
    m = lunar.moon_ecliptic(T, args.series)
    s_eq = positions.sun_equatorial(jd_tt)
    m_eq = positions.moon_equatorial(jd_tt, args.series)

    print(f"JD_UTC = {jd:.6f}   JD_TT = {jd_tt:.6f}   T = {T:.12f}")
    print(f"  GMST                       = {gmst_deg(jd):.6f}")
    print(f"  Mean obliquity             = {aa.mean_obliquity_deg(T):.6f}")
    print(f"  Sun apparent longitude     = {positions.sun_longitude(jd_tt):.6f}")
    print(f"  Sun RA / Dec               = {math.degrees(s_eq.right_ascension) % 360.0:.6f} / {math.degrees(s_eq.declination):.6f}")
    print(f"  Moon longitude / latitude  = {m.longitude:.6f} / {m.latitude:.6f}")
    print(f"  Moon RA / Dec              = {math.degrees(m_eq.right_ascension) % 360.0:.6f} / {math.degrees(m_eq.declination):.6f}")
    print(f"  Elongation                 = {positions.elongation(jd_tt, args.series):.6f}")
    print(f"  Lahiri ayanamsa            = {positions.ayanamsa_deg(jd_tt):.6f}")
    return 0


def cmd_eclipses(argv: list[str]) -> int:
    from . import api
    from .astro.time_scales import utc_to_local

    p = argparse.ArgumentParser(prog="panchangam eclipses", description="Solar and lunar eclipses of a year")
    p.add_argument("year", type=int)
    p.add_argument("--tz", type=float, default=5.5, help="UTC offset (hours) for printed times")
    args = p.parse_args(argv)

    for e in api.eclipses(args.year):
        mag = "" if e.magnitude is None else f"  magnitude {e.magnitude:.3f}"
        print(f"{_fmt(utc_to_local(e.peak, args.tz))}  {e.display_name:<26s} gamma {e.gamma:+.4f}{mag}")
    return 0


def main(
argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # shorthand: `panchangam YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="panchangam", description="Panchangam calendar toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Daily panchangam with rise/set and windows")
    sub.add_parser("at", help="Panchangam at an instant")
    sub.add_parser("rise-set", help="Sun or Moon rise/set for a date")
    sub.add_parser("find", help="Reverse lookup: masa/paksha/tithi -> dates")
    sub.add_parser("positions", help="Sun/Moon coordinates at a JD(UTC)")
    sub.add_parser("eclipses", help="Solar and lunar eclipses of a year")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["tithi-plot", "validate-ephem"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    commands = {
        "day": cmd_day,
        "at": cmd_at,
        "rise-set": cmd_rise_set,
        "find": cmd_find,
        "positions": cmd_positions,
        "eclipses": cmd_eclipses,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "diag":
        tool_map = {
            "tithi-plot": "panchangam.diagnostics.tithi_plot",
            "validate-ephem": "panchangam.diagnostics.ephem.validate_positions",
        }
        return _run_module_main(tool_map[args.tool], rest)

    p.error(f"unknown command {args.cmd}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
