import asyncio

from playwright_bridge.client import browser as browser_module
from playwright_bridge.client.browser import BrowserSession


class _FakePage:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


class _FakeContext:
    def __init__(self, base_url):
        self.base_url = base_url
        self.timeout = None
        self.closed = False
        self.page = _FakePage()

    def set_default_timeout(self, timeout):
        self.timeout = timeout

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class _FakeBrowser:
    def __init__(self, headless):
        self.headless = headless
        self.context = None
        self.closed = False

    async def new_context(self, base_url=None):
        self.context = _FakeContext(base_url)
        return self.context

    async def close(self):
        self.closed = True


class _FakeChromium:
    def __init__(self):
        self.browser = None

    async def launch(self, headless=True):
        self.browser = _FakeBrowser(headless)
        return self.browser


class _FakePlaywright:
    def __init__(self):
        self.chromium = _FakeChromium()
        self.stopped = False

    async def stop(self):
        self.stopped = True


class _FakeStarter:
    def __init__(self, playwright):
        self.playwright = playwright

    async def start(self):
        return self.playwright


def test_session_starts_page_against_base_url(monkeypatch):
    playwright = _FakePlaywright()
    monkeypatch.setattr(browser_module, "async_playwright", lambda: _FakeStarter(playwright))

    async def scenario():
        async with BrowserSession(base_url="http://127.0.0.1:9000", headless=False, timeout=5000) as page:
            return page

    page = asyncio.run(scenario())

    browser = playwright.chromium.browser
    assert browser.headless is False
    assert browser.context.base_url == "http://127.0.0.1:9000"
    assert browser.context.timeout == 5000
    assert page is browser.context.page
    assert page.closed and browser.context.closed and browser.closed
    assert playwright.stopped


def test_session_defaults_come_from_settings(monkeypatch):
    monkeypatch.setattr(browser_module.settings, "base_url", "http://app.test")
    monkeypatch.setattr(browser_module.settings, "headless", True)

    session = BrowserSession()

    assert session.base_url == "http://app.test"
    assert session.headless is True
    assert session.playwright is None
