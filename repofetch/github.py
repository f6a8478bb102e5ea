from __future__ import annotations

from types import TracebackType

import httpx
from loguru import logger

from repofetch import __version__
from repofetch.messages import FetchCompleted, FetchFailed
from repofetch.models import Repository, RepositoryDecodeError, decode_repositories

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0


class GitHubClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "User-Agent": f"repofetch/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )

    # -- context manager ---------------------------------------------------

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    # -- public API ---------------------------------------------------------

    async def get_user_repos(self, username: str) -> tuple[Repository, ...]:
        """Fetch the first page of public repos for ``username``.

        The username goes into the path as given, so an empty string asks for
        ``/users//repos`` and gets whatever the server answers for it.
        """
        resp = await self._client.get(f"/users/{username}/repos")
        resp.raise_for_status()

        try:
            payload = resp.json()
        except (ValueError, RecursionError) as exc:
            raise RepositoryDecodeError(f"response is not valid JSON: {exc}") from exc

        return decode_repositories(payload)

    async def close(self) -> None:
        await self._client.aclose()


async def fetch_repositories(client: GitHubClient, username: str) -> FetchCompleted | FetchFailed:
    """Run one fetch and report the outcome as a message for the update loop."""
    logger.info("Fetching repositories for {!r}", username)
    try:
        repos = await client.get_user_repos(username)
    except (httpx.HTTPError, RepositoryDecodeError) as exc:
        logger.warning("Fetching repositories for {!r} failed: {}", username, exc)
        return FetchFailed(exc)

    logger.info("Fetched {} repositories for {!r}", len(repos), username)
    return FetchCompleted(repos)
