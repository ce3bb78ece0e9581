"""
Browsers module - Browser automation implementations.
"""

from web_test_automation.browsers.playwright_browser import (
    PlaywrightBrowser,
    PlaywrightPage,
    PlaywrightLocator,
)

__all__ = [
    "PlaywrightBrowser",
    "PlaywrightPage",
    "PlaywrightLocator",
]
