from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import make_image
from imgorisort.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def no_env_output_root(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("IMGORISORT_OUTPUT_ROOT", raising=False)


def test_move_into_output_root(image_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"
    result = runner.invoke(app, [str(image_dir), str(out)])

    assert result.exit_code == 0
    assert "Relocated 3 of 3 image(s)." in result.stdout
    assert (out / "sqr" / "square.gif").exists()


def test_rename_mode(image_dir: Path) -> None:
    result = runner.invoke(app, [str(image_dir), "--rename"])

    assert result.exit_code == 0
    assert (image_dir / "tall_tall.jpg").exists()


def test_recursive_flag(tmp_path: Path) -> None:
    make_image(tmp_path / "in" / "deep" / "x.png", 2, 1)
    out = tmp_path / "out"

    flat = runner.invoke(app, [str(tmp_path / "in"), str(out)])
    deep = runner.invoke(app, [str(tmp_path / "in"), str(out), "-r"])

    assert "Relocated 0 of 0 image(s)." in flat.stdout
    assert "Relocated 1 of 1 image(s)." in deep.stdout
    assert (out / "wide" / "x.png").exists()


def test_dry_run_lists_plan(image_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"
    result = runner.invoke(app, [str(image_dir), str(out), "--dry-run"])

    assert result.exit_code == 0
    assert f"-> {out / 'wide' / 'wide.png'}" in result.stdout
    assert "Would relocate 3 of 3 image(s)." in result.stdout
    assert not out.exists()


def test_output_root_from_environment(image_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    out = tmp_path / "from_env"
    monkeypatch.setenv("IMGORISORT_OUTPUT_ROOT", str(out))

    result = runner.invoke(app, [str(image_dir)])

    assert result.exit_code == 0
    assert (out / "wide" / "wide.png").exists()


def test_quiet_suppresses_summary(image_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, [str(image_dir), str(tmp_path / "out"), "-q"])

    assert result.exit_code == 0
    assert result.stdout == ""


def test_verbose_summary_breaks_down_skips(image_dir: Path, tmp_path: Path) -> None:
    (image_dir / "corrupt.png").write_bytes(b"nope")
    result = runner.invoke(app, [str(image_dir), str(tmp_path / "out"), "-v"])

    assert result.exit_code == 0
    assert "Relocated 3 of 4 image(s)." in result.stdout
    assert "skipped (DECODE_FAIL): 1" in result.stdout


def test_missing_input_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, [str(tmp_path / "missing"), str(tmp_path / "out")])
    assert result.exit_code == 2


def test_overwrite_and_skip_existing_conflict(image_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, [str(image_dir), str(tmp_path / "out"), "--overwrite", "--skip-existing"])

    assert result.exit_code == 2
    assert len(list(image_dir.iterdir())) == 3


def test_copy_with_prefix(image_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"
    result = runner.invoke(app, [str(image_dir), str(out), "--copy", "--prefix"])

    assert result.exit_code == 0
    assert (out / "wide" / "wide_wide.png").exists()
    assert (image_dir / "wide.png").exists()
