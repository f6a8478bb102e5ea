from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from repofetch.messages import (
    Command,
    Fetch,
    FetchCompleted,
    FetchFailed,
    KeyPress,
    Quit,
)
from repofetch.models import Repository
from repofetch.widgets import InputField, ResultsTable, Spinner

NO_DESCRIPTION = "-no description-"
USERNAME_PLACEHOLDER = "Your GitHub username..."


def repository_rows(repos: tuple[Repository, ...]) -> list[tuple[str, str, str]]:
    """One table row per repository, in the order the server sent them."""
    return [
        (repo.name, repo.description or NO_DESCRIPTION, str(repo.stargazers_count))
        for repo in repos
    ]


def _new_input() -> InputField:
    return InputField(placeholder=USERNAME_PLACEHOLDER, width=100, focused=True, cursor_visible=True)


@dataclass
class AppState:
    """Everything the screen shows, changed only through :meth:`update`."""

    username: str = ""
    loading: bool = False
    error: FetchFailed | None = None
    repositories: tuple[Repository, ...] = ()
    input: InputField = field(default_factory=_new_input)
    table: ResultsTable = field(default_factory=ResultsTable)
    spinner: Spinner = field(default_factory=Spinner)

    def init(self) -> list[Command]:
        """Commands to run once at startup."""
        if self.input.focused:
            return [self.input.focus()]
        return []

    # -- update -------------------------------------------------------------

    def update(self, msg: object) -> list[Command]:
        cmds: list[Command] = []

        if isinstance(msg, FetchCompleted):
            self._on_completed(msg)
        elif isinstance(msg, FetchFailed):
            logger.info("Fetch for {!r} failed: {}", self.username, msg)
            self.error = msg
            self.loading = False
        elif isinstance(msg, KeyPress):
            if msg.key == "ctrl+c":
                logger.debug("Interrupt received, quitting")
                return [Quit()]
            if msg.key == "escape":
                cmds.extend(self._toggle_focus())
            elif msg.key == "enter" and self.input.focused:
                if self.loading:
                    logger.debug("Ignoring submit while a fetch is in flight")
                    return []
                return self._submit()

        for component in (self.input, self.table, self.spinner):
            cmd = component.update(msg)
            if cmd is not None:
                cmds.append(cmd)
        return cmds

    def _on_completed(self, msg: FetchCompleted) -> None:
        logger.info("Showing {} repositories for {!r}", len(msg.repositories), self.username)
        self.repositories = msg.repositories
        self.table.set_rows(repository_rows(msg.repositories))
        self.input.blur()
        self.table.focus()
        self.loading = False

    def _toggle_focus(self) -> list[Command]:
        if self.table.focused:
            self.table.blur()
            return [self.input.focus()]
        self.input.blur()
        self.table.focus()
        return []

    def _submit(self) -> list[Command]:
        self.username = self.input.value
        logger.info("Submitting username {!r}", self.username)
        self.input.blur()
        self.error = None
        self.loading = True
        return [Fetch(self.username), self.spinner.tick()]
