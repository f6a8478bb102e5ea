from __future__ import annotations

from dataclasses import dataclass


class RepositoryDecodeError(ValueError):
    """The API answered with something that is not a list of repositories."""


@dataclass(frozen=True)
class Repository:
    """A public GitHub repository as listed by ``/users/{username}/repos``."""

    name: str
    description: str = ""
    stargazers_count: int = 0

    @classmethod
    def from_github(cls, raw: dict) -> Repository:
        if not isinstance(raw, dict):
            raise RepositoryDecodeError(f"expected a repository object, got {type(raw).__name__}")

        name = raw.get("name")
        if not isinstance(name, str):
            raise RepositoryDecodeError("repository is missing a string 'name'")

        stars = raw.get("stargazers_count", 0)
        # bool is an int subclass
        if isinstance(stars, bool) or not isinstance(stars, int) or stars < 0:
            raise RepositoryDecodeError(f"invalid stargazers_count for {name}: {stars!r}")

        description = raw.get("description") or ""
        if not isinstance(description, str):
            raise RepositoryDecodeError(f"invalid description for {name}: {description!r}")

        return cls(name=name, description=description, stargazers_count=stars)


def decode_repositories(payload: object) -> tuple[Repository, ...]:
    """Decode a parsed JSON body into repositories, keeping server order."""
    if not isinstance(payload, list):
        raise RepositoryDecodeError(
            f"expected a JSON array of repositories, got {type(payload).__name__}"
        )
    return tuple(Repository.from_github(raw) for raw in payload)
