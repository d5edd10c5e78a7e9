#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from hilal.calendar import HijriCalendar


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "hilal[diagnostics]"') from e


@dataclass(frozen=True)
class LengthReport:
    offsets: np.ndarray          # every offset of the table
    baseline_lengths: np.ndarray
    effective_lengths: np.ndarray
    shift: np.ndarray            # effective start - baseline start, per month

    def counts(self, which: str = "effective") -> dict:
        arr = self.effective_lengths if which == "effective" else self.baseline_lengths
        values, counts = np.unique(arr, return_counts=True)
        return {int(v): int(c) for v, c in zip(values, counts)}

    def invalid(self) -> List[Tuple[int, int]]:
        bad = (self.effective_lengths < 29) | (self.effective_lengths > 30)
        return [(int(o), int(n)) for o, n in zip(self.offsets[:-1][bad], self.effective_lengths[bad])]

    def adjusted(self) -> np.ndarray:
        return self.offsets[self.shift != 0]


def build_report(cal: HijriCalendar) -> LengthReport:
    items = cal.view.items()
    offsets = np.array([o for o, _ in items], dtype=np.int64)
    eff = np.array([v for _, v in items], dtype=np.int64)
    base = np.array([cal.baseline.value_at(int(o)) for o in offsets], dtype=np.int64)
    return LengthReport(
        offsets=offsets,
        baseline_lengths=np.diff(base),
        effective_lengths=np.diff(eff),
        shift=eff - base,
    )


def plot_shift(cal: HijriCalendar, rep: LengthReport, out: str) -> None:
    plt = _need_matplotlib()
    months = [cal.baseline.off2month(int(o)) for o in rep.offsets]
    years = np.array([hy + (hm - 1) / 12.0 for hm, hy in months])
    fig, ax = plt.subplots(figsize=(12, 3.2))
    ax.step(years, rep.shift, where="post", color="0.15", lw=1.0)
    ax.axhline(0, color="0.7", lw=0.8)
    ax.set_xlabel("Hijri year")
    ax.set_ylabel("Start shift (days)")
    ax.set_title(f"Adjusted month starts vs baseline '{getattr(cal.baseline, 'name', '?')}'")
    fig.tight_layout()
    fig.savefig(out, dpi=200)
    print(f"Saved: {out}")


def main(argv: Optional[List[str]] = None) -> int:
    from hilal.cli import add_session_args, open_session

    p = argparse.ArgumentParser(
        prog="hilal diag month-lengths",
        description="Month-length statistics of the baseline and the adjusted calendar.",
    )
    p.add_argument("--plot", default=None, metavar="OUT.png", help="Save a plot of start shifts")
    add_session_args(p)
    args = p.parse_args(argv)

    cal = open_session(args)
    rep = build_report(cal)

    print(f"Months in table: {len(rep.offsets)}")
    print(f"  baseline : {rep.counts('baseline')}")
    print(f"  effective: {rep.counts('effective')}")
    adjusted = rep.adjusted()
    print(f"Adjusted months: {len(adjusted)}")
    for o in adjusted:
        hm, hy = cal.baseline.off2month(int(o))
        print(f"  {hm:2d}/{hy}  shift {int(rep.shift[o - rep.offsets[0]]):+d}")
    bad = rep.invalid()
    for o, n in bad:
        hm, hy = cal.baseline.off2month(o)
        print(f"  INVALID {hm}/{hy}: {n} days")

    if args.plot:
        plot_shift(cal, rep, args.plot)
    return 1 if bad else 0


if __name__ == "__main__":
    raise SystemExit(main())
