"""Tests for the python -m shows_api command line."""

from pathlib import Path
from unittest.mock import patch

import pytest

from shows_api.__main__ import main
from shows_api.settings import Settings


class TestMain:
    @staticmethod
    def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "serve" in capsys.readouterr().out

    @staticmethod
    def test_serve_runs_uvicorn_factory() -> None:
        with patch("uvicorn.run") as run:
            main(["serve"])
        args, kwargs = run.call_args
        assert args == ("shows_api.api.main:create_app",)
        assert kwargs["factory"] is True

    @staticmethod
    def test_interrupt_exit_code() -> None:
        with patch("uvicorn.run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main(["serve"])
        assert exc_info.value.code == 130


class TestInitDb:
    @staticmethod
    def test_creates_database_file(app_settings: Settings, tmp_path: Path) -> None:
        with patch("shows_api.settings.settings", app_settings):
            main(["init-db"])
        assert (tmp_path / "shows.db").exists()
