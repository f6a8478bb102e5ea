from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from functools import partial

from loguru import logger

from repofetch import __version__
from repofetch.config import Config
from repofetch.github import GitHubClient, fetch_repositories
from repofetch.state import AppState
from repofetch.tui import RepoFetchApp
from repofetch.widgets import ResultsTable


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (httpx, textual, etc.) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _setup_logging(config: Config) -> None:
    # The terminal belongs to the UI, so nothing goes to stderr while it runs.
    logger.remove()
    if config.log_file:
        logger.add(
            config.log_file,
            level=config.log_level,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss} | "
                "{level: <8} | "
                "{name}:{function}:{line} — "
                "{message}"
            ),
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in ("httpx", "httpcore", "textual", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repofetch",
        description="Browse the public GitHub repositories of a user in the terminal",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run_app(config: Config, headless: bool = False) -> int:
    """Run the UI until it exits and return its exit status."""
    async with GitHubClient(config.api_url, timeout=config.timeout) as github:
        app = RepoFetchApp(
            fetcher=partial(fetch_repositories, github),
            app_state=AppState(table=ResultsTable(height=config.table_height)),
        )
        logger.info("Starting repofetch {}", __version__)
        await app.run_async(headless=headless)

    # Textual catches errors raised inside the app and only reports them here.
    return app.return_code or 0


def main(argv: list[str] | None = None) -> None:
    build_parser().parse_args(argv)

    config = Config.from_env()
    _setup_logging(config)

    try:
        return_code = asyncio.run(run_app(config))
    except Exception:
        logger.exception("Unhandled exception running the terminal UI")
        print("Error running program:", sys.exc_info()[1], file=sys.stderr)
        sys.exit(1)

    if return_code:
        logger.error("repofetch exited with status {}", return_code)
        sys.exit(return_code)
    logger.info("repofetch exited")
