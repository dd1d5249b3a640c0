from pathlib import Path

import pytest

import gpxsplits.analyze.gpx_analyze as ga
from gpxsplits.config import AnalyzeConfig, GPXSplitsConfig, GPXSplitsPaths

from conftest import pt


@pytest.fixture
def fake_config(monkeypatch, tmp_path: Path):
    def _install(**analyze):
        cfg = GPXSplitsConfig(
            paths=GPXSplitsPaths(work_root=tmp_path, report_root=tmp_path / "_reports"),
            analyze=AnalyzeConfig(**analyze),
            source={},
        )
        monkeypatch.setattr(ga, "load_config", lambda: cfg)
        return cfg
    _install()
    return _install


def test_analyze_prints_report(fake_config, write_gpx, equator_track, capsys):
    path = write_gpx(equator_track)

    assert ga.main([str(path)]) == 0

    out = capsys.readouterr().out
    assert f"{path}  (25 points)" in out
    assert "-------Overall Statistics-------" in out
    assert "Elapsed Time: 888 sec" in out


def test_analyze_tsv(fake_config, write_gpx, equator_track, capsys):
    path = write_gpx(equator_track)

    assert ga.main(["--tsv", str(path)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == ga.TSV_HEADER
    assert [line.split("\t")[1] for line in lines[1:]] == ["1", "2", "3"]


def test_split_distance_flag_overrides_config(fake_config, write_gpx, equator_track, capsys):
    fake_config(split_distance_m=5000.0)
    path = write_gpx(equator_track)

    assert ga.main(["--tsv", "--split-distance", "500", str(path)]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1 + 5


def test_config_split_distance_used(fake_config, write_gpx, equator_track, capsys):
    fake_config(split_distance_m=5000.0)
    path = write_gpx(equator_track)

    assert ga.main(["--tsv", str(path)]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1 + 1


def test_writes_report_file(fake_config, write_gpx, equator_track, tmp_path, capsys):
    path = write_gpx(equator_track, "Morning Run.gpx")
    out_dir = tmp_path / "reports"

    assert ga.main(["--out", str(out_dir), str(path)]) == 0

    written = (out_dir / "morning_run_splits.txt").read_text(encoding="utf-8")
    assert written.startswith(f"{path}\n")
    assert "Splits Statistics End" in written
    assert "Wrote report" in capsys.readouterr().err


def test_bad_files_fail_but_others_are_reported(fake_config, write_gpx, equator_track, tmp_path, capsys):
    good = write_gpx(equator_track)
    backwards = write_gpx([pt(0, 0, 0, 50), pt(0, 0.001, 0, 10)], "backwards.gpx")
    missing = tmp_path / "nope.gpx"

    assert ga.main([str(missing), str(backwards), str(good)]) == 1

    captured = capsys.readouterr()
    assert "Skipping (not a file)" in captured.err
    assert f"Error: {backwards}" in captured.err
    assert f"{good}  (25 points)" in captured.out


def test_backwards_time_allowed_by_flag(fake_config, write_gpx, capsys):
    backwards = write_gpx([pt(0, 0, 0, 50), pt(0, 0.001, 0, 10)], "backwards.gpx")

    assert ga.main(["--allow-backwards-time", str(backwards)]) == 0
    assert "-0:40" in capsys.readouterr().out


def test_backwards_time_allowed_by_config(fake_config, write_gpx, capsys):
    fake_config(allow_backwards_time=True)
    backwards = write_gpx([pt(0, 0, 0, 50), pt(0, 0.001, 0, 10)], "backwards.gpx")

    assert ga.main([str(backwards)]) == 0


def test_fzf_selection_from_work_root(fake_config, write_gpx, equator_track, monkeypatch, capsys):
    path = write_gpx(equator_track)
    offered = []

    def fake_select(paths, *, root, header):
        offered.extend(paths)
        return [path]

    monkeypatch.setattr(ga, "fzf_select_gpx", fake_select)

    assert ga.main([]) == 0
    assert offered == [path]
    assert "Overall Statistics" in capsys.readouterr().out


def test_empty_selection(fake_config, write_gpx, equator_track, monkeypatch):
    write_gpx(equator_track)
    monkeypatch.setattr(ga, "fzf_select_gpx", lambda paths, **kw: [])

    assert ga.main([]) == 0


def test_no_gpx_under_work_root(fake_config, tmp_path):
    (tmp_path / "empty").mkdir()
    with pytest.raises(SystemExit, match="No GPX files"):
        ga.main(["--work-root", str(tmp_path / "empty")])


def test_non_positive_split_distance(fake_config, write_gpx, equator_track):
    assert ga.main(["--split-distance", "0", str(write_gpx(equator_track))]) == 2


def test_unreadable_file_is_a_per_file_failure(fake_config, write_gpx, equator_track, monkeypatch, capsys):
    locked = write_gpx(equator_track, "locked.gpx")
    good = write_gpx(equator_track)

    def fake_analyze(path, **options):
        if path == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_analyze(path, **options)

    real_analyze = ga.analyze_track
    monkeypatch.setattr(ga, "analyze_track", fake_analyze)

    assert ga.main([str(locked), str(good)]) == 1

    captured = capsys.readouterr()
    assert f"Error: {locked}" in captured.err
    assert f"{good}  (25 points)" in captured.out
