"""Fixtures for Playwright tests that talk to the bridge.

The helpers are async, so these fixtures run Playwright's async API on one
event loop instead of using pytest-playwright's synchronous `page`.
Set BASE_URL to the address of the application under test.
"""

import asyncio

import pytest

from playwright_bridge.client.browser import BrowserSession


@pytest.fixture(scope="session")
def run():
    """Run a coroutine on the loop shared by the browser session."""
    loop = asyncio.new_event_loop()
    yield loop.run_until_complete
    loop.close()


@pytest.fixture
def bridge_page(run):
    session = BrowserSession()
    page = run(session.start())
    yield page
    run(session.stop())
