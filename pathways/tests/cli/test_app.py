from __future__ import annotations

import os
from pathlib import Path

import pytest

from app import main
from i18n.i18n import get_translator, tr


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "home" / "appdata"))
    config_path = tmp_path / "config.json"
    storage_root = tmp_path / "saves"
    assert main(["--config", str(config_path), "set-root", str(storage_root)]) == 0
    return config_path, storage_root.resolve()


def _write(path: Path, offset: int = 0) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"data")
    os.utime(path, (1_700_000_000 + offset, 1_700_000_000 + offset))


def test_list_pathways(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    _write(storage_root / "alpha" / "boss.sav")
    capsys.readouterr()

    assert main(["--config", str(config_path), "list"]) == 0

    output = capsys.readouterr().out
    assert "alpha" in output
    assert "boss.sav" in output
    assert f"Storage: {storage_root}" in output


def test_list_marks_most_recently_saved_pathway(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    _write(storage_root / "alpha" / "old.sav", 1)
    _write(storage_root / "beta" / "new.sav", 5)
    capsys.readouterr()

    assert main(["--config", str(config_path), "list"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert any(line.startswith("* beta") for line in lines)
    assert any(line.startswith("  alpha") for line in lines)


def test_list_empty(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    capsys.readouterr()

    assert main(["--config", str(config_path), "list"]) == 0

    assert f"No pathways found in {storage_root}." in capsys.readouterr().out


def test_show_lists_manual_and_auto_saves(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    _write(storage_root / "alpha" / "boss.sav", 1)
    _write(storage_root / "alpha" / "auto_save_1.sav", 2)
    capsys.readouterr()

    assert main(["--config", str(config_path), "show", "alpha"]) == 0

    output = capsys.readouterr().out
    assert "ID: alpha" in output
    assert "Auto-Save: OFF (3 slots, 300.0s)" in output
    assert "Manual saves (1)" in output
    assert "Auto-saves (1)" in output


def test_show_missing_pathway(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, _storage_root = cli_env

    assert main(["--config", str(config_path), "show", "ghost"]) == 1
    assert "Pathway ghost does not exist." in capsys.readouterr().out


def test_auto_save_path_creates_directory(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    capsys.readouterr()

    assert main(["--config", str(config_path), "auto-save-path", "alpha"]) == 0

    assert capsys.readouterr().out.strip() == str(storage_root / "alpha" / "auto_save_1.sav")
    assert (storage_root / "alpha").is_dir()


def test_save_path_with_name(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    capsys.readouterr()

    assert main(["--config", str(config_path), "save-path", "alpha", "--name", "boss.sav"]) == 0

    assert capsys.readouterr().out.strip() == str(storage_root / "alpha" / "boss.sav")


def test_delete_commands(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    _write(storage_root / "alpha" / "boss.sav")
    _write(storage_root / "alpha" / "intro.sav")

    assert main(["--config", str(config_path), "delete-file", "alpha", "boss.sav"]) == 0
    assert not (storage_root / "alpha" / "boss.sav").exists()
    assert main(["--config", str(config_path), "delete-file", "alpha", "boss.sav"]) == 1
    assert main(["--config", str(config_path), "delete", "alpha"]) == 0
    assert not (storage_root / "alpha").exists()
    assert main(["--config", str(config_path), "delete", "alpha"]) == 1


def test_german_output(cli_env: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
    config_path, storage_root = cli_env
    capsys.readouterr()

    try:
        assert main(["--config", str(config_path), "--language", "de", "list"]) == 0
        assert f"Keine Pfade in {storage_root} gefunden." in capsys.readouterr().out
    finally:
        get_translator().set_language("en")


def test_unknown_key_is_returned_verbatim() -> None:
    assert tr("missing.key") == "missing.key"


def test_unusable_config_location_reports_filesystem_error(
    cli_env: tuple[Path, Path], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"not a directory")
    capsys.readouterr()

    assert main(["--config", str(blocker / "config.json"), "list"]) == 1

    assert "File system error" in capsys.readouterr().out
