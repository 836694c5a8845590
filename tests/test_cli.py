"""Tests for prowl._cli — argument parsing and command dispatch."""

from __future__ import annotations

from pathlib import Path

import pytest

from prowl._cli import _build_parser, _routes, main
from tests.conftest import HELLO, write_controller


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_routes_default_args(self) -> None:
        args = _build_parser().parse_args(["routes"])
        assert args.command == "routes"
        assert args.root == "."
        assert args.controllers is None

    def test_routes_with_root_and_controllers(self) -> None:
        args = _build_parser().parse_args(["routes", "my-api/", "--controllers", "handlers"])
        assert args.root == "my-api/"
        assert args.controllers == "handlers"

    def test_serve_default_args(self) -> None:
        args = _build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.root == "."
        assert args.host is None
        assert args.port is None

    def test_serve_all_flags(self) -> None:
        args = _build_parser().parse_args([
            "serve", "my-api/",
            "--controllers", "handlers",
            "--host", "0.0.0.0",
            "--port", "8080",
        ])
        assert args.root == "my-api/"
        assert args.controllers == "handlers"
        assert args.host == "0.0.0.0"
        assert args.port == 8080

    def test_no_command_returns_none(self) -> None:
        assert _build_parser().parse_args([]).command is None

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["--version"])
        assert "0.1.0" in capsys.readouterr().out


class TestRoutesCommand:
    """prowl routes — prints the resolved route table."""

    def test_prints_table(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_controller(tmp_path / "controllers", "v1/hello.py", HELLO)
        assert _routes(str(tmp_path), None) == 0
        err = capsys.readouterr().err
        assert "1 route registered" in err
        assert "/v1/hello" in err

    def test_custom_controllers_dir(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_controller(tmp_path / "api", "ping.py", HELLO)
        assert _routes(str(tmp_path), "api") == 0
        assert "/ping" in capsys.readouterr().err

    def test_missing_controllers_dir(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert _routes(str(tmp_path), None) == 1
        assert "is not valid" in capsys.readouterr().err

    def test_broken_controller(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_controller(tmp_path / "controllers", "bad.py", "raise RuntimeError('boom')\n")
        assert _routes(str(tmp_path), None) == 1
        assert "boom" in capsys.readouterr().err

    def test_main_exit_code(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as info:
            main(["routes", str(tmp_path)])
        assert info.value.code == 1

    def test_main_without_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as info:
            main([])
        assert info.value.code == 0
        assert "usage: prowl" in capsys.readouterr().out
