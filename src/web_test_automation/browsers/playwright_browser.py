"""
Playwright Browser - Implementation of the browser primitives using Playwright.
"""

from typing import Any, List, Optional
import logging

from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from web_test_automation.interfaces.browser import (
    AriaRole,
    BrowserType,
    IBrowser,
    ILocator,
    IPage,
)
from web_test_automation.exceptions.browser import (
    BrowserLaunchError,
    BrowserConnectionError,
    NavigationError,
    TimeoutError as BrowserTimeoutError,
)

logger = logging.getLogger(__name__)


class PlaywrightLocator(ILocator):
    """
    Playwright implementation of ILocator.

    Wraps a Playwright Locator and translates its timeouts into
    BrowserTimeoutError.
    """

    def __init__(self, locator: Any, description: str = ""):
        """
        Initialize the locator wrapper.

        Args:
            locator: Playwright Locator
            description: How this locator was built, for error messages
        """
        self._locator = locator
        self._description = description

    def __repr__(self) -> str:
        return f"PlaywrightLocator({self._description!r})"

    async def count(self) -> int:
        return await self._locator.count()

    def nth(self, index: int) -> ILocator:
        return PlaywrightLocator(self._locator.nth(index), f"{self._description} >> nth={index}")

    async def all(self) -> List[ILocator]:
        handles = await self._locator.all()
        return [
            PlaywrightLocator(handle, f"{self._description} >> nth={i}")
            for i, handle in enumerate(handles)
        ]

    async def click(self, timeout_ms: Optional[int] = None) -> None:
        try:
            await self._locator.click(timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise BrowserTimeoutError(
                f"Timed out clicking {self._description}: {e}",
                timeout_ms=timeout_ms,
                operation="click",
            ) from e

    async def fill(self, value: str) -> None:
        await self._locator.fill(value)

    async def clear(self) -> None:
        await self._locator.clear()

    async def is_visible(self) -> bool:
        return await self._locator.is_visible()

    async def tag_name(self) -> str:
        return await self._locator.evaluate("el => el.tagName.toLowerCase()")

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self._locator.get_attribute(name)

    async def text_content(self) -> Optional[str]:
        return await self._locator.text_content()

    async def wait_for(self, state: str = "visible", timeout_ms: Optional[int] = None) -> None:
        try:
            await self._locator.wait_for(state=state, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise BrowserTimeoutError(
                f"Timed out waiting for {self._description} to be {state}",
                timeout_ms=timeout_ms,
                operation="wait_for",
            ) from e


class PlaywrightPage(IPage):
    """
    Playwright implementation of IPage.

    Wraps a Playwright Page for navigation and element lookup.
    """

    def __init__(self, page: Any):
        """
        Initialize the page wrapper.

        Args:
            page: Playwright Page object
        """
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def goto(
        self,
        url: str,
        wait_until: str = "load",
        timeout_ms: Optional[int] = None,
    ) -> None:
        try:
            await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}", url=url) from e

    def get_by_role(
        self,
        role: AriaRole,
        name: Optional[str] = None,
        exact: bool = False,
    ) -> ILocator:
        role_name = role.value if isinstance(role, AriaRole) else str(role)
        if name is None:
            return PlaywrightLocator(self._page.get_by_role(role_name), f"role={role_name}")
        return PlaywrightLocator(
            self._page.get_by_role(role_name, name=name, exact=exact),
            f"role={role_name}[name={name!r}{'' if exact else ' i'}]",
        )

    def get_by_text(self, text: str, exact: bool = False) -> ILocator:
        return PlaywrightLocator(self._page.get_by_text(text, exact=exact), f"text={text!r}")

    def get_by_label(self, text: str, exact: bool = False) -> ILocator:
        return PlaywrightLocator(self._page.get_by_label(text, exact=exact), f"label={text!r}")

    def get_by_placeholder(self, text: str, exact: bool = False) -> ILocator:
        return PlaywrightLocator(
            self._page.get_by_placeholder(text, exact=exact),
            f"placeholder={text!r}",
        )

    def locator(self, selector: str) -> ILocator:
        return PlaywrightLocator(self._page.locator(selector), selector)

    async def wait_for_load_state(self, state: str = "load", timeout_ms: Optional[int] = None) -> None:
        try:
            await self._page.wait_for_load_state(state, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise BrowserTimeoutError(
                f"Page did not reach '{state}' in time",
                timeout_ms=timeout_ms,
                operation="wait_for_load_state",
            ) from e

    async def close(self) -> None:
        await self._page.close()


class PlaywrightBrowser(IBrowser):
    """
    Playwright implementation of IBrowser.

    Example:
        >>> browser = PlaywrightBrowser()
        >>> await browser.launch(headless=True)
        >>> page = await browser.new_page(viewport={"width": 1920, "height": 1080})
        >>> await page.goto("https://example.com")
        >>> await browser.close()
    """

    def __init__(self):
        """Initialize the browser (not launched yet)."""
        self._playwright: Any = None
        self._browser: Any = None
        self._default_context: Any = None

    @property
    def is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        **options: Any,
    ) -> None:
        """
        Launch the browser.

        Args:
            headless: Whether to run headless
            browser_type: Type of browser to launch
            **options: Additional Playwright launch options (args, channel, slow_mo)
        """
        try:
            self._playwright = await async_playwright().start()

            browser_launchers = {
                BrowserType.CHROMIUM: self._playwright.chromium,
                BrowserType.FIREFOX: self._playwright.firefox,
                BrowserType.WEBKIT: self._playwright.webkit,
            }
            launcher = browser_launchers.get(browser_type, self._playwright.chromium)

            self._browser = await launcher.launch(
                headless=headless,
                **options,
            )

            logger.info(f"Launched {browser_type.value} browser (headless={headless})")

        except Exception as e:
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

    async def new_page(self, **options: Any) -> IPage:
        """
        Create a new page.

        Args:
            **options: Context options (viewport, etc.)

        Returns:
            New page instance
        """
        if not self._browser:
            raise BrowserConnectionError("Browser not launched. Call launch() first.")

        if not self._default_context:
            self._default_context = await self._browser.new_context(**options)

        page = await self._default_context.new_page()
        return PlaywrightPage(page)

    async def close(self) -> None:
        """Close the browser and cleanup."""
        if self._default_context:
            await self._default_context.close()
            self._default_context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")
