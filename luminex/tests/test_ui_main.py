from __future__ import annotations

from pathlib import Path

import pytest

from luminex.config import (
    LEVEL_ENV_VAR,
    SAVE_ENV_VAR,
    GameDirectories,
    default_level_root,
    get_ruleset,
    resolve_directories,
)
from luminex.ui.layout import HEADER_HEIGHT, compute_geometry
from luminex.ui.main import bootstrap_directories, main


def test_resolve_directories_returns_package_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(SAVE_ENV_VAR, raising=False)

    directories = resolve_directories()

    assert isinstance(directories, GameDirectories)
    assert directories.level_root == default_level_root()
    assert directories.level_root.exists()
    assert directories.save_path.name == "best_scores.json"


def test_resolve_directories_honours_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    level_dir = tmp_path / "levels"
    level_dir.mkdir()
    save_path = tmp_path / "scores" / "best.json"

    monkeypatch.setenv(LEVEL_ENV_VAR, str(level_dir))
    monkeypatch.setenv(SAVE_ENV_VAR, str(save_path))

    directories = resolve_directories()

    assert directories.level_root == level_dir
    assert directories.save_path == save_path


def test_explicit_level_root_wins_over_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, str(tmp_path / "ignored"))

    directories = resolve_directories(level_root=tmp_path)

    assert directories.level_root == tmp_path


def test_resolve_directories_errors_on_missing_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, str(tmp_path / "missing_levels"))

    with pytest.raises(FileNotFoundError):
        resolve_directories()
    assert resolve_directories(check_exists=False).level_root == tmp_path / "missing_levels"


def test_unknown_ruleset_name():
    assert get_ruleset("classic").name == "classic"
    with pytest.raises(KeyError):
        get_ruleset("hardcore")


def test_bootstrap_prints_message(capsys: pytest.CaptureFixture[str]):
    directories = bootstrap_directories()
    output = capsys.readouterr().out

    assert "Luminex UI bootstrap" in output
    assert str(directories.level_root) in output
    assert str(directories.save_path) in output


def test_cli_info(capsys: pytest.CaptureFixture[str]):
    assert main(["--info"]) == 0
    assert "Luminex UI bootstrap" in capsys.readouterr().out


def test_cli_lists_levels(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["--list-levels"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Available levels" in output
    assert "  7: Two Lights" in output


def test_geometry_centres_board_below_header():
    geometry = compute_geometry(5, 3, window=(800, 600), cell_size=60)

    x, y, width, height = geometry.board
    assert (width, height) == (300, 180)
    assert x == (800 - 300) // 2
    assert y >= HEADER_HEIGHT
    assert geometry.window == (800, 600)


def test_geometry_grows_window_for_large_boards():
    geometry = compute_geometry(10, 10, window=(320, 240), cell_size=60)

    assert geometry.window[0] >= 600
    assert geometry.footer[1] + geometry.footer[3] == geometry.window[1]
