"""
Playwright Browser Session.
Manages the browser lifecycle for scripts and the generated conftest that
drive the bridge through Playwright's async API.
"""

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from ..core.config import settings


class BrowserSession:
    """
    Starts a Chromium page whose relative URLs resolve against the
    application under test, so ``page.request`` reaches the bridge.

    Example:
        async with BrowserSession() as page:
            await login(page)
            await page.goto("/dashboard")
    """

    def __init__(
        self,
        base_url: str | None = None,
        headless: bool | None = None,
        timeout: int | None = None
    ):
        """
        Initialize browser session.

        Args:
            base_url: Application URL (defaults to config)
            headless: Run in headless mode (defaults to config)
            timeout: Default timeout in ms (defaults to config)
        """
        self.base_url = base_url or settings.base_url
        self.headless = headless if headless is not None else settings.headless
        self.timeout = timeout if timeout is not None else settings.browser_timeout

        self.playwright: Playwright | None = None
        self.browser: Browser | None = None
        self.context: BrowserContext | None = None
        self.page: Page | None = None

    async def start(self) -> Page:
        """
        Start browser and return page.

        Returns:
            Playwright Page object
        """
        self.playwright = await async_playwright().start()

        self.browser = await self.playwright.chromium.launch(headless=self.headless)

        self.context = await self.browser.new_context(base_url=self.base_url)
        self.context.set_default_timeout(self.timeout)

        self.page = await self.context.new_page()

        return self.page

    async def stop(self) -> None:
        """Stop browser and cleanup."""
        if self.page:
            await self.page.close()
            self.page = None

        if self.context:
            await self.context.close()
            self.context = None

        if self.browser:
            await self.browser.close()
            self.browser = None

        if self.playwright:
            await self.playwright.stop()
            self.playwright = None

    async def __aenter__(self) -> Page:
        return await self.start()

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
