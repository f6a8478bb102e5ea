"""Textual host for the update loop.

The app owns no logic of its own: key presses become :class:`KeyPress`
messages, every message goes through :meth:`AppState.update`, and the
commands it returns are carried out here. Fetches run as async workers on the
app's event loop and their result comes back as a message.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import partial

from loguru import logger
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from repofetch.messages import Command, Fetch, FetchCompleted, FetchFailed, KeyPress, Quit, Tick
from repofetch.state import AppState
from repofetch.theme import Theme
from repofetch.view import render

Fetcher = Callable[[str], Awaitable[FetchCompleted | FetchFailed]]


class RepoFetchApp(App):
    TITLE = "repofetch"
    CSS = """
    #view {
        height: auto;
    }
    """
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        # These reach the loop as plain keys instead of Textual's own actions.
        Binding("ctrl+c", "deliver_key('ctrl+c')", show=False, priority=True),
        Binding("ctrl+q", "deliver_key('ctrl+q')", show=False, priority=True),
    ]

    def __init__(
        self,
        fetcher: Fetcher,
        app_state: AppState | None = None,
        view_theme: Theme | None = None,
    ) -> None:
        super().__init__()
        self.app_state = app_state or AppState()
        self.view_theme = view_theme or Theme()
        self._fetcher = fetcher
        self._loop_stopped = False

    @property
    def stopped(self) -> bool:
        """True once Ctrl-C has been handled; later messages are dropped."""
        return self._loop_stopped

    def compose(self) -> ComposeResult:
        yield Static(id="view")

    def on_mount(self) -> None:
        self._run_commands(self.app_state.init())
        self._redraw()

    # -- input --------------------------------------------------------------

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.deliver(KeyPress(event.key, event.character))

    def action_deliver_key(self, key: str) -> None:
        self.deliver(KeyPress(key))

    async def action_quit(self) -> None:
        # Only Ctrl-C ends the app.
        self.deliver(KeyPress("ctrl+q"))

    # -- loop ---------------------------------------------------------------

    def deliver(self, msg: object) -> None:
        """Feed one message through the loop, then run its commands and redraw."""
        if self._loop_stopped:
            return
        self._run_commands(self.app_state.update(msg))
        if not self._loop_stopped:
            self._redraw()

    def _run_commands(self, cmds: list[Command]) -> None:
        for cmd in cmds:
            if isinstance(cmd, Quit):
                self._loop_stopped = True
                self.workers.cancel_group(self, "fetch")
                self.exit()
                return
            if isinstance(cmd, Tick):
                self.set_timer(cmd.delay, partial(self.deliver, cmd.message))
            elif isinstance(cmd, Fetch):
                self.run_worker(
                    self._fetch(cmd.username),
                    name=f"fetch:{cmd.username}",
                    group="fetch",
                )
            else:
                raise TypeError(f"unknown command: {cmd!r}")

    async def _fetch(self, username: str) -> None:
        try:
            msg = await self._fetcher(username)
        except Exception as exc:
            logger.opt(exception=True).error("Fetch for {!r} raised", username)
            msg = FetchFailed(exc)
        if self._loop_stopped:
            logger.debug("Dropping fetch result for {!r} after quit", username)
            return
        self.deliver(msg)

    def _redraw(self) -> None:
        self.query_one("#view", Static).update(render(self.app_state, self.view_theme))
