"""Tests for the containersync command line entry point."""

from __future__ import annotations

from pathlib import Path

from containersync.main import main


def test_main_reports_pushed_container(
    tmp_path: Path, source_repo, make_remote, make_container, capsys
) -> None:
    remote = make_remote("web", {"README.md": "hello\n"})
    make_container("web", {"README.md": "hello\n", "new.txt": "x\n"})
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "web.cfg").write_text("", encoding="utf-8")

    code = main(
        [
            str(source_repo),
            str(tmp_path / "target"),
            str(configs),
            "--config",
            str(tmp_path),
            "--remote-uri-pattern",
            str(tmp_path / "remotes" / "${name}.git"),
        ]
    )

    assert code == 0
    assert f"web: pushed ({remote})" in capsys.readouterr().out


def test_main_reads_pattern_from_config_file(
    tmp_path: Path, source_repo, make_remote, make_container, capsys
) -> None:
    make_remote("web", {"README.md": "hello\n"})
    make_container("web", {"README.md": "hello\n"})
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "web.cfg").write_text("", encoding="utf-8")
    config_file = tmp_path / "containersync.yaml"
    config_file.write_text(
        f"gitRemoteUriPattern: '{tmp_path / 'remotes'}/${{name}}.git'\n", encoding="utf-8"
    )

    code = main([str(source_repo), str(tmp_path / "target"), str(configs), "--config", str(config_file)])

    assert code == 0
    assert "web: no_change" in capsys.readouterr().out


def test_main_returns_error_on_failure(tmp_path: Path, source_repo, capsys) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "web.cfg").write_text("", encoding="utf-8")

    code = main([str(source_repo), str(tmp_path / "target"), str(configs), "--config", str(tmp_path)])

    assert code == 1
    assert "error: Missing property gitRemoteUriPattern" in capsys.readouterr().err
