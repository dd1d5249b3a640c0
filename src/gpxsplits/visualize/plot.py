# gpxsplits/visualize/plot.py
"""
Plotting routines for gpxsplits
"""

import matplotlib.pyplot as plt


def plot_splits(splits, *, title=None, show=True):
    """Bar chart of speed per split, elevation change on a second axis."""
    idx = [s.index for s in splits]
    speeds = [s.speed_kmh if s.speed_kmh is not None else 0.0 for s in splits]
    elev = [s.elevation_delta_m for s in splits]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(idx, speeds, color="tab:blue", alpha=0.7)
    ax.set_xlabel("Split")
    ax.set_ylabel("Speed (km/h)")
    ax.set_xticks(idx)

    ax2 = ax.twinx()
    ax2.plot(idx, elev, color="tab:red", marker="o")
    ax2.axhline(0.0, color="tab:red", linewidth=0.5, linestyle=":")
    ax2.set_ylabel("Elevation change (m)")

    ax.set_title(title or "Splits")
    fig.tight_layout()
    if show:
        plt.show()
    return fig
