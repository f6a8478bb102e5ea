"""
Tests for the Textual host, driven through Textual's pilot.
"""

import asyncio
import time

from repofetch.messages import FetchCompleted, FetchFailed
from repofetch.models import Repository
from repofetch.tui import RepoFetchApp


async def _no_repos(username: str) -> FetchCompleted:
    return FetchCompleted(())


async def test_submit_fetches_in_background_and_fills_table() -> None:
    calls: list[str] = []

    async def fetcher(username: str) -> FetchCompleted:
        calls.append(username)
        return FetchCompleted((Repository("Hello-World", "", 42),))

    app = RepoFetchApp(fetcher=fetcher)
    async with app.run_test() as pilot:
        await pilot.press(*"octocat")
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert calls == ["octocat"]
        assert app.app_state.table.rows == [("Hello-World", "-no description-", "42")]
        assert app.app_state.table.focused
        assert not app.app_state.loading


async def test_failed_fetch_is_stored() -> None:
    async def fetcher(username: str) -> FetchFailed:
        return FetchFailed(TimeoutError("timed out"))

    app = RepoFetchApp(fetcher=fetcher)
    async with app.run_test() as pilot:
        await pilot.press("a", "enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.app_state.error is not None
        assert not app.app_state.loading
        assert app.app_state.table.rows == []


async def test_raising_fetcher_is_reported_and_submit_works_again() -> None:
    calls: list[str] = []

    async def fetcher(username: str) -> FetchCompleted:
        calls.append(username)
        if len(calls) == 1:
            raise RecursionError("maximum recursion depth exceeded")
        return FetchCompleted((Repository("Hello-World", "", 42),))

    app = RepoFetchApp(fetcher=fetcher)
    async with app.run_test() as pilot:
        await pilot.press("a", "enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert not app.app_state.loading
        assert isinstance(app.app_state.error.error, RecursionError)

        # input is unfocused after submit: escape twice brings it back
        await pilot.press("escape", "escape", "enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert calls == ["a", "a"]
        assert app.app_state.error is None
        assert app.app_state.table.rows == [("Hello-World", "-no description-", "42")]


async def test_escape_switches_focus() -> None:
    app = RepoFetchApp(fetcher=_no_repos)
    async with app.run_test() as pilot:
        await pilot.press("escape")

        assert app.app_state.table.focused
        assert not app.app_state.input.focused


async def test_ctrl_c_stops_the_loop() -> None:
    app = RepoFetchApp(fetcher=_no_repos)
    async with app.run_test() as pilot:
        await pilot.press("ctrl+c")

        assert app.stopped
        app.deliver(FetchCompleted((Repository("late", "", 1),)))
        assert app.app_state.table.rows == []


async def test_ctrl_c_does_not_wait_for_a_slow_fetch() -> None:
    started = asyncio.Event()

    async def slow(username: str) -> FetchCompleted:
        started.set()
        await asyncio.sleep(30)
        return FetchCompleted((Repository("late", "", 1),))

    app = RepoFetchApp(fetcher=slow)
    begin = time.monotonic()
    async with app.run_test() as pilot:
        await pilot.press("a", "enter")
        await asyncio.wait_for(started.wait(), timeout=5)
        await pilot.press("ctrl+c")
    elapsed = time.monotonic() - begin

    assert app.stopped
    assert elapsed < 5
    assert app.app_state.table.rows == []


async def test_textual_quit_and_palette_keys_are_inert() -> None:
    app = RepoFetchApp(fetcher=_no_repos)
    async with app.run_test() as pilot:
        await pilot.press("ctrl+q", "ctrl+p")
        await pilot.pause()

        assert not app.stopped
        assert len(app.screen_stack) == 1

        # the loop is still taking keys
        await pilot.press("escape")
        assert app.app_state.table.focused
