"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and load-state waits with typed failures
    - Thin driver primitives (click, fill, text, visibility, title, wait)
    - Capability-based locator building (role, text, label, placeholder, test id)
    - A composed SmartLocator built from the page's element map
    - Screenshot and failure-capture utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, Response
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from empsd_tools.common import ConfigLoader
from empsd_tools.report_tools import attach_json, attach_png_file, attach_text

from .errors import NavigationError, WaitTimeoutError
from .smart_locator import LocatorKind, LocatorSpec, ResolutionPair, SmartLocator, build_locator


Target = Union[str, Locator]

# Keep only the most recent API responses for failure reports
MAX_CAPTURED_RESPONSES = 20


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare `URL_PATH` and an `ELEMENTS` map and build their
    operations from `self.smart` (fallback-aware) and the primitives below
    (raw driver calls, failures propagate unchanged).

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login?redirect=%2F"
            ELEMENTS = {
                "login_button": ResolutionPair(
                    by_role("button", name=re.compile("masuk", re.I)),
                    "button[type='submit']",
                ),
            }

            async def click_login_button(self):
                await self.smart.click("login_button")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    ELEMENTS: Dict[str, ResolutionPair] = {}

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        smart: Optional[SmartLocator] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object (owned for the duration of one test)
            base_url: Application base URL; defaults to `app.base_url`
            smart: Interaction object; built from ELEMENTS when omitted
            config: Configuration source; defaults to the ConfigLoader singleton
        """
        self.page = page
        self.config = config or ConfigLoader()
        self.base_url = (base_url or self.config.base_url).rstrip("/")
        self.timeouts: Dict[str, int] = {
            tier: self.config.timeout(tier)
            for tier in ("short", "medium", "long", "very_long")
        }
        self.smart = smart or SmartLocator(
            page,
            self.ELEMENTS,
            probe_timeout=self.timeouts["short"],
            action_timeout=self.timeouts["short"],
        )
        self.screenshot_dir = Path(self.config.get("screenshots.path", "test-results/screenshots"))
        self.screenshots_enabled = bool(self.config.get("screenshots.enabled", True))

        self._captured_responses: List[Dict[str, Any]] = []
        self._setup_response_capture()

    def _setup_response_capture(self) -> None:
        """Record recent API responses for failure reports."""

        def capture_response(response: Response) -> None:
            if "/api/" not in response.url:
                return
            self._captured_responses.append({
                "timestamp": datetime.now().isoformat(),
                "url": response.url,
                "status": response.status,
            })
            if len(self._captured_responses) > MAX_CAPTURED_RESPONSES:
                self._captured_responses.pop(0)

        self.page.on("response", capture_response)

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.page.url

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(
        self,
        url: Optional[str] = None,
        wait_until: str = "load",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Navigate to `url` (defaults to this page's URL).

        Raises:
            NavigationError: When the driver cannot reach the URL in time
        """
        target = url or self.url
        with allure.step(f"Navigate to {target}"):
            try:
                await self.page.goto(
                    target,
                    wait_until=wait_until,
                    timeout=timeout or self.timeouts["long"],
                )
            except PlaywrightError as e:
                raise NavigationError(f"Could not reach {target}: {e}") from e
            logger.debug(f"Navigated to: {target}")

    async def wait_for_load(
        self,
        state: str = "networkidle",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait until the driver reports the page idle.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Milliseconds; defaults to the long tier (30s)

        Raises:
            WaitTimeoutError: When the state is not reached in time
        """
        timeout = timeout or self.timeouts["long"]
        try:
            await self.page.wait_for_load_state(state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(
                f"Page did not reach '{state}' within {timeout}ms"
            ) from e

    # =========================================================================
    # Driver Primitives
    # =========================================================================

    def _locator(self, target: Target) -> Locator:
        if isinstance(target, str):
            return self.page.locator(target).first
        return target

    async def get_title(self) -> str:
        return await self.page.title()

    async def get_text(self, target: Target) -> str:
        """Text content of a selector or locator."""
        return await self._locator(target).text_content() or ""

    async def is_visible(self, target: Target) -> bool:
        return await self._locator(target).is_visible()

    async def click(self, target: Target, timeout: Optional[int] = None) -> None:
        with allure.step(f"Click: {target}"):
            await self._locator(target).click(timeout=timeout or self.timeouts["short"])

    async def fill(self, target: Target, value: str, timeout: Optional[int] = None) -> None:
        shown = "*" * len(value) if "password" in str(target).lower() else value
        with allure.step(f"Fill {target}: {shown}"):
            await self._locator(target).fill(value, timeout=timeout or self.timeouts["short"])

    async def wait(self, ms: int) -> None:
        """Fixed pause; prefer readiness waits where a signal exists."""
        await self.page.wait_for_timeout(ms)

    async def set_viewport(self, width: int, height: int) -> None:
        with allure.step(f"Set viewport {width}x{height}"):
            await self.page.set_viewport_size({"width": width, "height": height})

    def resolve_by_capability(
        self,
        kind: Union[LocatorKind, str],
        value: Any,
        **options: Any,
    ) -> Locator:
        """
        Build a locator from a capability kind and descriptor.

        >>> page_obj.resolve_by_capability("role", "button", name="Masuk")
        >>> page_obj.resolve_by_capability(LocatorKind.PLACEHOLDER, "Alamat email")
        """
        spec = LocatorSpec(LocatorKind(kind), value, tuple(sorted(options.items())))
        return build_locator(self.page, spec)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Optional[Path]:
        """
        Take a timestamped screenshot.

        Returns:
            Path to the PNG, or None when screenshots are disabled in config
        """
        if not self.screenshots_enabled:
            logger.debug(f"Screenshots disabled, skipping: {name}")
            return None

        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.screenshot_dir / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            attach_png_file(filepath, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Screenshot
            - Current URL
            - Recent API responses
            - Locator health report
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            attach_text(self.page.url, name="Current URL")
            if self._captured_responses:
                attach_json(self._captured_responses[-10:], name="Recent API Responses")
            attach_text(self.get_locator_health_report(), name="Locator Health")

    def get_locator_health_report(self) -> str:
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
