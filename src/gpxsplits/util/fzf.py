# gpxsplits/util/fzf.py
"""
Pick GPX files interactively with `fzf`.

Candidates are shown relative to the folder they were found under, so two
`Current.gpx` files from different days can be told apart.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from shutil import which

from gpxsplits.errors import FzfNotFoundError, SelectionError

# fzf exit codes that mean "nothing chosen" rather than failure
_NO_SELECTION = (1, 130)


def _label(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def fzf_select_gpx(gpx_files: list[Path], *, root: Path, header: str) -> list[Path]:
    """Return the files chosen in fzf (multi-select), as resolved paths."""
    if not which("fzf"):
        raise FzfNotFoundError("fzf not found on PATH")

    # each line is "label<TAB>fullpath"; only the label is shown and searched
    feed = "".join(f"{_label(p, root)}\t{p}\n" for p in gpx_files)
    cmd = [
        "fzf", "--multi",
        "--delimiter=\t", "--with-nth=1",
        "--height=60%", "--layout=reverse", "--border",
        "--header", header,
    ]
    proc = subprocess.run(cmd, input=feed.encode(), stdout=subprocess.PIPE, stderr=subprocess.PIPE)

    if proc.returncode in _NO_SELECTION:
        return []
    if proc.returncode != 0:
        raise SelectionError(proc.stderr.decode(errors="replace"))

    selected: list[Path] = []
    for line in proc.stdout.decode().splitlines():
        if "\t" not in line:
            continue
        selected.append(Path(line.split("\t", 1)[1]).expanduser().resolve())
    return selected
