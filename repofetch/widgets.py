"""Stateful UI components driven by the update loop.

Each component takes every message through ``update``, changes its own state
and may return one follow-up command. ``view`` renders the current state and
never changes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich import box
from rich.spinner import Spinner as RichSpinner
from rich.table import Table
from rich.text import Text

from repofetch.messages import Command, CursorBlink, KeyPress, SpinnerTick, Tick
from repofetch.theme import Theme

BLINK_INTERVAL = 0.53

# Braille dots (⣾ ⣽ ⣻ ...), taken from rich's spinner table.
_DOTS = RichSpinner("dots2")
DOT_FRAMES = tuple(f"{frame} " for frame in _DOTS.frames)
DOT_INTERVAL = _DOTS.interval / 1000


# -- text input -------------------------------------------------------------


@dataclass
class InputField:
    placeholder: str = ""
    width: int = 100
    char_limit: int = 0
    prompt: str = "> "
    value: str = ""
    cursor: int = 0
    focused: bool = False
    cursor_visible: bool = False
    _blink_tag: int = field(default=0, init=False, repr=False)

    def focus(self) -> Tick:
        self.focused = True
        self.cursor_visible = True
        return self._next_blink()

    def blur(self) -> None:
        self.focused = False
        self.cursor_visible = False

    def set_value(self, value: str) -> None:
        if self.char_limit:
            value = value[: self.char_limit]
        self.value = value
        self.cursor = len(value)

    def _next_blink(self) -> Tick:
        # A new tag orphans any blink already scheduled.
        self._blink_tag += 1
        return Tick(BLINK_INTERVAL, CursorBlink(self._blink_tag))

    def _insert(self, text: str) -> None:
        if self.char_limit and len(self.value) + len(text) > self.char_limit:
            text = text[: max(0, self.char_limit - len(self.value))]
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def update(self, msg: object) -> Command | None:
        if isinstance(msg, CursorBlink):
            if not self.focused or msg.tag != self._blink_tag:
                return None
            self.cursor_visible = not self.cursor_visible
            return self._next_blink()

        if not self.focused or not isinstance(msg, KeyPress):
            return None

        key = msg.key
        if key == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key == "right":
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = self.value[self.cursor :]
            self.cursor = 0
        elif key == "ctrl+k":
            self.value = self.value[: self.cursor]
        elif msg.is_printable:
            self._insert(msg.character)
        else:
            return None

        # Typing keeps the cursor solid until the next blink.
        self.cursor_visible = True
        return self._next_blink()

    def view(self, theme: Theme) -> Text:
        text = Text(self.prompt, style=theme.prompt)
        show_cursor = self.focused and self.cursor_visible

        if not self.value and self.placeholder:
            if show_cursor:
                text.append(self.placeholder[0], style=theme.cursor + theme.placeholder)
                text.append(self.placeholder[1:], style=theme.placeholder)
            else:
                text.append(self.placeholder, style=theme.placeholder)
            return text

        start = max(0, self.cursor - self.width + 1)
        visible = self.value[start : start + self.width]
        pos = self.cursor - start

        text.append(visible[:pos])
        if show_cursor:
            text.append(visible[pos : pos + 1] or " ", style=theme.cursor)
            text.append(visible[pos + 1 :])
        else:
            text.append(visible[pos:])
        return text


# -- results table ----------------------------------------------------------


@dataclass(frozen=True)
class Column:
    title: str
    width: int


REPOSITORY_COLUMNS = (
    Column("Name", 30),
    Column("Description", 40),
    Column("Stars", 30),
)


@dataclass
class ResultsTable:
    columns: tuple[Column, ...] = REPOSITORY_COLUMNS
    height: int = 20
    rows: list[tuple[str, ...]] = field(default_factory=list)
    focused: bool = False
    cursor: int = 0
    offset: int = 0

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def set_rows(self, rows: list[tuple[str, ...]]) -> None:
        self.rows = list(rows)
        self._move_to(self.cursor)

    @property
    def selected_row(self) -> tuple[str, ...] | None:
        if not self.rows:
            return None
        return self.rows[self.cursor]

    @property
    def visible_rows(self) -> list[tuple[str, ...]]:
        return self.rows[self.offset : self.offset + self.height]

    def _move_to(self, index: int) -> None:
        if not self.rows:
            self.cursor = 0
            self.offset = 0
            return
        self.cursor = max(0, min(index, len(self.rows) - 1))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.height:
            self.offset = self.cursor - self.height + 1
        self.offset = max(0, min(self.offset, len(self.rows) - self.height))

    def update(self, msg: object) -> Command | None:
        if not self.focused or not isinstance(msg, KeyPress):
            return None

        half = max(1, self.height // 2)
        key, char = msg.key, msg.character
        if key == "up" or char == "k":
            self._move_to(self.cursor - 1)
        elif key == "down" or char == "j":
            self._move_to(self.cursor + 1)
        elif key == "pageup" or char == "b":
            self._move_to(self.cursor - self.height)
        elif key in ("pagedown", "space") or char in ("f", " "):
            self._move_to(self.cursor + self.height)
        elif key == "ctrl+u":
            self._move_to(self.cursor - half)
        elif key == "ctrl+d":
            self._move_to(self.cursor + half)
        elif key == "home" or char == "g":
            self._move_to(0)
        elif key == "end" or char == "G":
            self._move_to(len(self.rows) - 1)
        return None

    def view(self, theme: Theme) -> Table:
        table = Table(
            box=box.SIMPLE_HEAD,
            border_style=theme.border,
            header_style=theme.header,
            show_edge=False,
            pad_edge=False,
        )
        for column in self.columns:
            table.add_column(column.title, width=column.width, no_wrap=True, overflow="ellipsis")

        for index, row in enumerate(self.visible_rows, start=self.offset):
            style = theme.selected if index == self.cursor else None
            table.add_row(*row, style=style)
        return table


# -- spinner ----------------------------------------------------------------


@dataclass
class Spinner:
    frames: tuple[str, ...] = DOT_FRAMES
    interval: float = DOT_INTERVAL
    frame: int = 0
    _tag: int = field(default=0, init=False, repr=False)

    def tick(self) -> Tick:
        """Start (or restart) the animation; older tick chains die off."""
        self._tag += 1
        return Tick(self.interval, SpinnerTick(self._tag))

    def update(self, msg: object) -> Command | None:
        if not isinstance(msg, SpinnerTick) or msg.tag != self._tag:
            return None
        self.frame = (self.frame + 1) % len(self.frames)
        return self.tick()

    def view(self) -> str:
        return self.frames[self.frame]
