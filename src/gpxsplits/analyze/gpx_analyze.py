#!/usr/bin/env python3
"""
gpxsplits: analyze GPX track(s) into overall statistics and 1 km splits.

Paths on the command line are analyzed directly; with none, GPX files under
the work root are offered through fzf.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gpxsplits.analyze.report import TSV_HEADER, render_report, render_splits_tsv
from gpxsplits.analyze.track import TrackAnalysis, analyze_track
from gpxsplits.config import load_config
from gpxsplits.errors import GPXSplitsError
from gpxsplits.util.fzf import fzf_select_gpx
from gpxsplits.util.logging import log
from gpxsplits.util.paths import ensure_dir, report_path


def print_report(path: Path, analysis: TrackAnalysis, *, tsv: bool) -> None:
    if tsv:
        for row in render_splits_tsv(path, analysis):
            print(row)
    else:
        print(f"\n{path}  ({analysis.points} points)")
        print(render_report(analysis), end="")


def write_report(out_dir: Path, path: Path, analysis: TrackAnalysis) -> Path:
    ensure_dir(out_dir)
    dest = report_path(out_dir, path)
    dest.write_text(f"{path}\n{render_report(analysis)}", encoding="utf-8")
    return dest


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="gpxsplits: Analyze GPX file(s) into splits.")
    ap.add_argument("gpx", nargs="*",
                    help="One or more GPX files. If omitted, use fzf selection.")
    ap.add_argument("--work-root", default=None,
                    help="Where to look for GPX files (default: from config or ~/GPS/_work)")
    ap.add_argument("--split-distance", type=float, default=None, metavar="M",
                    help="Split length in meters (default: from config or 1000).")
    ap.add_argument("--allow-backwards-time", action="store_true", default=None,
                    help="Keep tracks whose timestamps go backwards (negative durations).")
    ap.add_argument("--tsv", action="store_true",
                    help="Print tab-separated split rows (good for piping).")
    ap.add_argument("--out", default=None, metavar="DIR",
                    help="Also write each text report into DIR.")
    ap.add_argument("--plot", action="store_true",
                    help="Show a chart of split speed and elevation change.")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config()
    except GPXSplitsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    split_distance_m = (cfg.analyze.split_distance_m
                        if args.split_distance is None
                        else args.split_distance)
    if split_distance_m <= 0:
        print("Error: --split-distance must be positive", file=sys.stderr)
        return 2
    allow_backwards_time = (cfg.analyze.allow_backwards_time
                            if args.allow_backwards_time is None
                            else args.allow_backwards_time)

    if args.gpx:
        selected = [Path(p).expanduser() for p in args.gpx]
    else:
        work_root = Path(args.work_root).expanduser() if args.work_root else cfg.paths.work_root
        gpx_files = sorted(work_root.rglob("*.gpx"))
        if not gpx_files:
            raise SystemExit(f"No GPX files found under {work_root}")
        try:
            selected = fzf_select_gpx(
                gpx_files,
                root=work_root,
                header="Select GPX file(s) to analyze:",
            )
        except GPXSplitsError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        if not selected:
            log("No selection made. Exiting.")
            return 0

    if args.tsv:
        print(TSV_HEADER)

    failures = 0
    for path in selected:
        if not path.is_file():
            log(f"Skipping (not a file): {path}")
            failures += 1
            continue
        try:
            analysis = analyze_track(
                path,
                split_distance_m=split_distance_m,
                allow_backwards_time=allow_backwards_time,
            )
        except (GPXSplitsError, OSError) as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            failures += 1
            continue

        print_report(path, analysis, tsv=args.tsv)

        if args.out:
            dest = write_report(Path(args.out).expanduser(), path, analysis)
            log(f"Wrote report: {dest}")

        if args.plot:
            from gpxsplits.visualize.plot import plot_splits
            plot_splits(analysis.splits, title=path.name)

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
