from __future__ import annotations

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from repofetch.state import AppState
from repofetch.theme import Theme

TITLE = "Let's fetch your GitHub repos!"
LOADING_LABEL = " Fetching repositories..."


def status_line(state: AppState, theme: Theme) -> Text:
    """Spinner while loading, the last error otherwise, else an empty line."""
    if state.loading:
        return Text(state.spinner.view() + LOADING_LABEL, style=theme.spinner)
    if state.error is not None:
        return Text(f"Error: {state.error}", style=theme.error)
    return Text("")


def render(state: AppState, theme: Theme) -> Group:
    return Group(
        Text(TITLE),
        Text(""),
        state.input.view(theme),
        status_line(state, theme),
        Panel(
            state.table.view(theme),
            box=box.SQUARE,
            border_style=theme.border,
            expand=False,
            padding=0,
        ),
    )
