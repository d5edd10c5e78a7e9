from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from datetime import date

from .core.errors import HilalError


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def add_session_args(p: argparse.ArgumentParser) -> None:
    """Options shared by every command that opens a calendar session."""
    p.add_argument("--baseline", default="tabular", help="Baseline spec name (default: tabular)")
    p.add_argument("--baseline-file", default=None, help="JSON baseline table (overrides --baseline)")
    p.add_argument("--adj-file", default=None, help="Adjustment snapshot file (read, and written by add/delete)")
    p.add_argument("--start-year", type=int, default=None)
    p.add_argument("--end-year", type=int, default=None)
    p.add_argument("--lang", default="en", choices=["en", "ar"])
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def open_session(args: argparse.Namespace):
    from .api import open_calendar
    from .logging_config import setup_logging

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    kwargs = {"baseline": args.baseline, "langcode": args.lang}
    for key in ("baseline_file", "adj_file", "start_year", "end_year"):
        val = getattr(args, key)
        if val is not None:
            kwargs[key] = val
    return open_calendar(**kwargs)


def _save(cal, args: argparse.Namespace) -> None:
    from .api import save_adjustments

    if args.adj_file:
        save_adjustments(cal, args.adj_file)
        print(f"Saved: {args.adj_file}")


def cmd_candidates(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hilal candidates", description="Possible starts of a Hijri month")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    cands = cal.possible_starts(args.year, args.month)
    if not cands:
        print(f"{args.month}/{args.year} is outside the calendar table")
        return 1
    for c in cands:
        mark = "*" if c.current_set else " "
        print(f"{mark} {c.label:<12} (mjd {c.day_count})")
        for a in c.also_adjustments:
            print(f"      also {a.month}/{a.year} -> {a.label} (mjd {a.day_count})")
    return 0


def cmd_add(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hilal add", description="Set the start of a Hijri month")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("start", help="Modified Julian day or Gregorian d/m/yyyy")
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    before = dict(cal.store.entries())
    if not cal.add_adjustment(args.year, args.month, args.start):
        print(f"Rejected: {args.start} would not leave the previous month 29 or 30 days long")
        return 1
    for info in cal.current_adjustments():
        if before.get(info.offset) != info.current:
            print(f"{info.month}/{info.year}: {info.default_label} -> {info.current_label}")
    for off in sorted(set(before) - set(cal.store)):
        hm, hy = cal.baseline.off2month(off)
        default = cal.baseline.value_at(off)
        print(f"{hm}/{hy}: {cal.gregorian_label(before[off])} -> {cal.gregorian_label(default)}")
    _save(cal, args)
    return 0


def cmd_delete(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hilal delete", description="Remove the adjustment of a Hijri month")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("--dry-run", action="store_true", help="Only list the adjustments that would be removed")
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    if args.dry_run:
        also = cal.deletion_preview(args.year, args.month)
    else:
        also = cal.delete_adjustment(args.year, args.month)
    for hm, hy in also:
        print(f"also removed: {hm}/{hy}")
    if not args.dry_run:
        _save(cal, args)
    return 0


def cmd_list(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hilal list", description="Current month-start adjustments")
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    rows = cal.current_adjustments()
    if not rows:
        print("No adjustments.")
    for r in rows:
        print(f"{r.month:2d}/{r.year}  current {r.current_label:<12} default {r.default_label}")
    return 0


def cmd_check(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hilal check", description="Verify every month is 29 or 30 days long")
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    bad = cal.view.violations()
    for off, length in bad:
        hm, hy = cal.baseline.off2month(off)
        print(f"{hm}/{hy}: {length} days")
    print(f"{len(cal.baseline)} months, {len(cal.store)} adjusted, {len(bad)} invalid")
    return 1 if bad else 0


def cmd_convert(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hilal convert", description="Gregorian -> Hijri date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--format", default=None, help="Output format, e.g. '_j _F _Y'")
    add_session_args(p)
    args = p.parse_args(argv)

    if not _DATE_RE.match(args.date):
        raise SystemExit("date must be YYYY-MM-DD")
    cal = open_session(args)
    from .core.time import date_to_mjd
    print(cal.format(date_to_mjd(_parse_ymd(args.date)), args.format))
    return 0


def cmd_month(argv: list[str]) -> int:
    from .api import months_in_year

    p = argparse.ArgumentParser(prog="hilal month", description="List the months of a Hijri year")
    p.add_argument("year", type=int)
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    for row in months_in_year(cal, args.year):
        tag = "*" if row["adjusted"] else " "
        days = row["days"] if row["days"] is not None else "?"
        print(f"{tag} {row['month']:2d} {row['name']:<18} {row['label']:<12} {days}")
    return 0


COMMANDS = {
    "candidates": (cmd_candidates, "Possible starts of a Hijri month"),
    "add": (cmd_add, "Set the start of a Hijri month"),
    "delete": (cmd_delete, "Remove the adjustment of a Hijri month"),
    "list": (cmd_list, "Current adjustments"),
    "check": (cmd_check, "Verify the 29/30-day law"),
    "convert": (cmd_convert, "Gregorian -> Hijri date"),
    "month": (cmd_month, "List the months of a Hijri year"),
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="hilal", description="Adjustable Hijri calendar toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name, (_, help_text) in COMMANDS.items():
        sub.add_parser(name, help=help_text, add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["month-lengths"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    try:
        if args.cmd == "diag":
            tool_map = {
                "month-lengths": "hilal.diagnostics.month_lengths",
            }
            return _run_module_main(tool_map[args.tool], rest)
        fn, _ = COMMANDS[args.cmd]
        return fn(rest)
    except (HilalError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
