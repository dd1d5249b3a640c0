# gpxsplits/analyze/report.py
"""
Text rendering of a TrackAnalysis: overall statistics followed by the
split table.
"""

from __future__ import annotations

from pathlib import Path

from gpxsplits.analyze.track import TrackAnalysis

RULE = "-" * 50
TSV_HEADER = "file\tsplit\tduration_s\tpace\tdistance_m\tspeed_kmh\televation_m"


def _fmt_optional(value: float | None, spec: str, width: int) -> str:
    if value is None:
        return f"{'-':>{width}}"
    return f"{value:{width}{spec}}"


def render_report(analysis: TrackAnalysis) -> str:
    s = analysis.summary
    lines = [
        "",
        "-------Overall Statistics-------",
        f"Path Length: {s.total_distance_m:5.0f} m",
        f"Elapsed Time: {s.total_elapsed_s} sec",
        f"Average Pace: {_fmt_optional(s.average_pace, '.2f', 4)} min/km",
        "",
        "-------Splits Statistics-------",
        RULE,
        " Split No. | Pace m:s | Speed km/h | Elevation m",
        RULE,
    ]
    for sp in analysis.splits:
        lines.append(
            f"{sp.index:6d} {sp.pace:>12} "
            f"{_fmt_optional(sp.speed_kmh, '.2f', 11)} "
            f"{sp.elevation_delta_m:11.0f}"
        )
    lines.append(RULE)
    lines.append("-------Splits Statistics End-------")
    return "\n".join(lines) + "\n"


def render_splits_tsv(path: Path, analysis: TrackAnalysis) -> list[str]:
    """One tab-separated row per split (no header; see TSV_HEADER)."""
    rows = []
    for sp in analysis.splits:
        speed = "" if sp.speed_kmh is None else f"{sp.speed_kmh:.3f}"
        rows.append(
            f"{path}\t"
            f"{sp.index}\t"
            f"{sp.duration_s}\t"
            f"{sp.pace}\t"
            f"{sp.distance_m:.2f}\t"
            f"{speed}\t"
            f"{sp.elevation_delta_m:.1f}"
        )
    return rows
