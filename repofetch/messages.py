"""Messages consumed by the update loop and commands it hands back to the host.

A message is a plain value describing something that happened (a key press, a
finished fetch, a timer firing). A command is a request for the host to do
something outside the loop; whatever it produces comes back as a message.
"""

from __future__ import annotations

from dataclasses import dataclass

from repofetch.models import Repository


# -- messages ---------------------------------------------------------------


@dataclass(frozen=True)
class KeyPress:
    key: str
    character: str | None = None

    @property
    def is_printable(self) -> bool:
        return self.character is not None and len(self.character) == 1 and self.character.isprintable()


@dataclass(frozen=True)
class FetchCompleted:
    repositories: tuple[Repository, ...]


@dataclass(frozen=True)
class FetchFailed:
    error: Exception

    def __str__(self) -> str:
        return str(self.error) or type(self.error).__name__


@dataclass(frozen=True)
class SpinnerTick:
    tag: int


@dataclass(frozen=True)
class CursorBlink:
    tag: int


# -- commands ---------------------------------------------------------------


@dataclass(frozen=True)
class Fetch:
    username: str


@dataclass(frozen=True)
class Tick:
    """Deliver ``message`` back to the loop after ``delay`` seconds."""

    delay: float
    message: object


@dataclass(frozen=True)
class Quit:
    pass


Command = Fetch | Tick | Quit
