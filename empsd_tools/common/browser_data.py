"""
================================================================================
Browser Data & Misc Test Helpers
================================================================================

Small helpers shared by the UI suites:
    - clear_browser_data: cookies + local/session storage hygiene per test
    - random data generators for throwaway accounts
    - naming/timestamp helpers for reports

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import random
import re
import string
import time
from datetime import datetime, timezone

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page


CLEAR_STORAGE_SCRIPT = """() => {
    try { window.localStorage && window.localStorage.clear(); } catch (_) {}
    try { window.sessionStorage && window.sessionStorage.clear(); } catch (_) {}
}"""

# addInitScript takes a script body, not a function expression
CLEAR_STORAGE_INIT_SCRIPT = f"({CLEAR_STORAGE_SCRIPT})();"

_HTTP_ORIGIN = re.compile(r"^https?://", re.IGNORECASE)


async def clear_browser_data(page: Page) -> None:
    """
    Clear cookies and web storage for the page's browser context.

    Storage is only cleared directly on http(s) origins (about:blank raises a
    SecurityError); an init script also clears it on every future navigation.
    Cookie clearing errors propagate, storage errors are logged and ignored.
    """
    context = page.context
    await context.clear_cookies()

    if _HTTP_ORIGIN.match(page.url or ""):
        try:
            await page.evaluate(CLEAR_STORAGE_SCRIPT)
        except PlaywrightError as e:
            logger.debug(f"Storage clear skipped on {page.url}: {e}")

    try:
        await context.add_init_script(script=CLEAR_STORAGE_INIT_SCRIPT)
    except PlaywrightError as e:
        logger.debug(f"Could not register storage-clearing init script: {e}")


def generate_random_email(domain: str = "test.com") -> str:
    """test_<epoch-ms>_<6 random chars>@domain"""
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"test_{timestamp}_{suffix}@{domain}"


def generate_random_string(length: int = 8) -> str:
    """Random alphanumeric string of `length` characters."""
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def current_timestamp() -> str:
    """Current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).isoformat()


def format_test_name(name: str) -> str:
    """
    Turn a camelCase/snake_case test name into a readable title.

    >>> format_test_name("loginWithInvalidEmail")
    'Login With Invalid Email'
    """
    spaced = re.sub(r"([A-Z])", r" \1", name.replace("_", " "))
    spaced = re.sub(r"\s+", " ", spaced).strip()
    return spaced[:1].upper() + spaced[1:]


__all__ = [
    "clear_browser_data",
    "current_timestamp",
    "format_test_name",
    "generate_random_email",
    "generate_random_string",
]
