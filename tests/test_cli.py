"""
Tests for the command-line entry point.
"""

import pytest

from repofetch import __version__, cli
from repofetch.config import Config


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_unknown_arguments_are_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["octocat"])

    assert excinfo.value.code == 2


@pytest.fixture
def log_file(monkeypatch: pytest.MonkeyPatch, tmp_path):
    path = tmp_path / "repofetch.log"
    monkeypatch.setenv("REPOFETCH_LOG_FILE", str(path))
    monkeypatch.setattr("repofetch.config.load_dotenv", lambda: False)
    return path


def test_startup_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch, log_file) -> None:
    async def boom(config: Config) -> int:
        raise RuntimeError("no terminal")

    monkeypatch.setattr(cli, "run_app", boom)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert "no terminal" in log_file.read_text()


def test_crash_reported_by_the_app_exits_non_zero(monkeypatch: pytest.MonkeyPatch, log_file) -> None:
    async def crashed(config: Config) -> int:
        return 1

    monkeypatch.setattr(cli, "run_app", crashed)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1


def test_clean_exit_returns_normally(monkeypatch: pytest.MonkeyPatch, log_file) -> None:
    async def clean(config: Config) -> int:
        return 0

    monkeypatch.setattr(cli, "run_app", clean)

    cli.main([])


async def test_error_inside_the_ui_sets_return_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_render(state, theme):
        raise RuntimeError("render failed")

    monkeypatch.setattr("repofetch.tui.render", broken_render)

    assert await cli.run_app(Config(), headless=True) == 1
