"""
Browser Interface - Abstract base classes for the browser primitives.

The engine never talks to Playwright directly. It relies on the small
capability set below: navigation, role/text/label/placeholder lookups that
return zero-or-more handles, click/fill/clear, waiting, and reading URL,
visibility and tag/role.

Example:
    >>> from web_test_automation.browsers import PlaywrightBrowser
    >>> browser = PlaywrightBrowser()
    >>> await browser.launch(headless=True)
    >>> page = await browser.new_page()
    >>> await page.goto("https://example.com")
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional


class BrowserType(Enum):
    """Supported browser types."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class AriaRole(str, Enum):
    """Accessible roles the resolver looks elements up by."""
    BUTTON = "button"
    LINK = "link"


class ILocator(ABC):
    """
    A lazy handle to zero or more elements on the page.

    Like a Playwright locator, it is re-evaluated on every call, so
    ``count()`` reflects the page at the time it is awaited.
    """

    @abstractmethod
    async def count(self) -> int:
        """Number of elements currently matching."""
        ...

    @abstractmethod
    def nth(self, index: int) -> "ILocator":
        """Locator narrowed to the element at ``index`` (DOM order)."""
        ...

    @property
    def first(self) -> "ILocator":
        """Locator narrowed to the first match."""
        return self.nth(0)

    @abstractmethod
    async def all(self) -> List["ILocator"]:
        """One locator per current match."""
        ...

    @abstractmethod
    async def click(self, timeout_ms: Optional[int] = None) -> None:
        """
        Click the element.

        Args:
            timeout_ms: Maximum time to wait for the element to be actionable
        """
        ...

    @abstractmethod
    async def fill(self, value: str) -> None:
        """Set the value of an input element."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear the value of an input element."""
        ...

    @abstractmethod
    async def is_visible(self) -> bool:
        """Whether the element is rendered and visible."""
        ...

    @abstractmethod
    async def tag_name(self) -> str:
        """Lower-case tag name of the element."""
        ...

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value, or None if absent."""
        ...

    @abstractmethod
    async def text_content(self) -> Optional[str]:
        """Text content of the element."""
        ...

    @abstractmethod
    async def wait_for(self, state: str = "visible", timeout_ms: Optional[int] = None) -> None:
        """
        Wait for the element to reach a state.

        Args:
            state: 'attached', 'detached', 'visible' or 'hidden'
            timeout_ms: Maximum time to wait in milliseconds

        Raises:
            BrowserTimeoutError: If the state is not reached in time
        """
        ...


class IPage(ABC):
    """
    Abstract interface for the browser page operations the engine uses.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Get the current page URL."""
        ...

    @abstractmethod
    async def goto(
        self,
        url: str,
        wait_until: str = "load",
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Navigate to a URL.

        Args:
            url: The URL to navigate to
            wait_until: 'load', 'domcontentloaded' or 'networkidle'
            timeout_ms: Maximum navigation time in milliseconds

        Raises:
            NavigationError: If navigation fails or times out
        """
        ...

    @abstractmethod
    def get_by_role(
        self,
        role: AriaRole,
        name: Optional[str] = None,
        exact: bool = False,
    ) -> ILocator:
        """
        Elements by accessible role and name.

        Args:
            role: Accessible role
            name: Accessible name to match, or None for every element of the role
            exact: Whole-string, case-sensitive match when True;
                case-insensitive substring match when False
        """
        ...

    @abstractmethod
    def get_by_text(self, text: str, exact: bool = False) -> ILocator:
        """Elements by their text content."""
        ...

    @abstractmethod
    def get_by_label(self, text: str, exact: bool = False) -> ILocator:
        """Input elements associated with a matching label."""
        ...

    @abstractmethod
    def get_by_placeholder(self, text: str, exact: bool = False) -> ILocator:
        """Input elements by placeholder text."""
        ...

    @abstractmethod
    def locator(self, selector: str) -> ILocator:
        """Elements matching a CSS selector."""
        ...

    @abstractmethod
    async def wait_for_load_state(self, state: str = "load", timeout_ms: Optional[int] = None) -> None:
        """
        Wait for the page to reach a specific load state.

        Raises:
            BrowserTimeoutError: If the state is not reached in time
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close this page."""
        ...


class IBrowser(ABC):
    """
    Abstract interface for browser management.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the browser is connected and running."""
        ...

    @abstractmethod
    async def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        **options: Any,
    ) -> None:
        """
        Launch a browser instance.

        Raises:
            BrowserLaunchError: If the browser cannot be started
        """
        ...

    @abstractmethod
    async def new_page(self, **options: Any) -> IPage:
        """Create a new browser page/tab."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the browser and cleanup resources."""
        ...
