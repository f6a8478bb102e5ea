from __future__ import annotations

from dataclasses import dataclass

from rich.style import Style


@dataclass(frozen=True)
class Theme:
    """Visual styles, built once at startup and handed to the view."""

    border: Style = Style(color="color(240)")
    header: Style = Style(bold=False)
    selected: Style = Style(color="color(229)", bgcolor="color(57)", bold=False)
    spinner: Style = Style(bold=True, color="color(15)", bgcolor="color(57)")
    error: Style = Style(color="red", bold=True)
    placeholder: Style = Style(color="color(240)")
    prompt: Style = Style()
    cursor: Style = Style(reverse=True)
