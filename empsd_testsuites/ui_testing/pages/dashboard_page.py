"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

EMPSD dashboard: the landing screen after a successful login.

Readiness is detected from rendered content (a heading containing the
expected text), not from navigation events or HTTP status.

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure
from loguru import logger

from empsd_testsuites.ui_testing.framework.page_base import PageBase
from empsd_testsuites.ui_testing.framework.readiness import heading_contains
from empsd_testsuites.ui_testing.framework.smart_locator import (
    ResolutionPair,
    by_role,
    by_test_id,
)


# Time for the user menu dropdown to open
MENU_SETTLE_MS = 500

ALL_HEADINGS_SELECTOR = "h1, h2, h3, h4, h5, h6"
MAIN_LANDMARK_SELECTOR = 'main, [role="main"]'


class DashboardPage(PageBase):
    """Dashboard page object (async)."""

    URL_PATH = "/dashboard"
    PAGE_TITLE = "PLN EMPSD"

    ELEMENTS = {
        "page_title": ResolutionPair(
            by_test_id("page-title"),
            'h1, h2, [data-testid="page-title"]',
        ),
        "empsd_heading": ResolutionPair(
            by_role("heading", name=re.compile(r"empsd", re.I)),
            'h1:has-text("EMPSD"), h2:has-text("EMPSD"), [data-testid="empsd-heading"]',
        ),
        "user_menu": ResolutionPair(
            by_test_id("user-menu"),
            '[data-testid="user-menu"], .user-menu, .profile-menu',
        ),
        "logout_button": ResolutionPair(
            by_role("button", name=re.compile(r"logout|keluar", re.I)),
            'button:has-text("Logout"), button:has-text("Keluar"), a:has-text("Logout")',
        ),
        "navigation_menu": ResolutionPair(
            by_role("navigation"),
            "nav, .navigation, .sidebar",
        ),
        "main_content": ResolutionPair(
            by_role("main"),
            "main, .main-content, .dashboard-content",
        ),
    }

    @property
    def expected_heading(self) -> str:
        return self.config.get("expected.heading", "EMPSD")

    @allure.step("Open dashboard")
    async def open(self) -> "DashboardPage":
        await self.navigate()
        await self.wait_for_load()
        return self

    # =========================================================================
    # Heading and Title
    # =========================================================================

    async def is_empsd_heading_visible(self) -> bool:
        return await self.smart.is_visible("empsd_heading")

    async def get_empsd_heading_text(self) -> str:
        """
        Raises:
            ElementNotFoundError: When the heading cannot be located
        """
        return await self.smart.get_text("empsd_heading")

    async def get_page_title(self) -> str:
        return await self.smart.get_text("page_title")

    # =========================================================================
    # User Menu and Logout
    # =========================================================================

    async def is_user_menu_visible(self) -> bool:
        return await self.smart.is_visible("user_menu")

    @allure.step("Open user menu")
    async def click_user_menu(self) -> None:
        await self.smart.click("user_menu")

    @allure.step("Click logout")
    async def click_logout(self) -> None:
        await self.smart.click("logout_button")

    @allure.step("Logout")
    async def logout(self) -> None:
        """Open the user menu when present, then log out."""
        if await self.is_user_menu_visible():
            await self.click_user_menu()
            await self.wait(MENU_SETTLE_MS)
        await self.click_logout()
        await self.wait_for_load()

    # =========================================================================
    # Layout Probes
    # =========================================================================

    async def is_navigation_visible(self) -> bool:
        return await self.smart.is_visible("navigation_menu")

    async def is_main_content_visible(self) -> bool:
        return await self.smart.is_visible("main_content")

    async def heading_count(self) -> int:
        return await self.page.locator(ALL_HEADINGS_SELECTOR).count()

    async def main_landmark_count(self) -> int:
        return await self.page.locator(MAIN_LANDMARK_SELECTOR).count()

    # =========================================================================
    # Readiness
    # =========================================================================

    @allure.step("Wait for dashboard to load")
    async def wait_for_dashboard_load(self, timeout: Optional[int] = None) -> None:
        """
        Wait for network idle, then for a heading containing the expected text.

        Raises:
            WaitTimeoutError: When either wait exceeds its deadline
        """
        await self.wait_for_load()
        await heading_contains(self.expected_heading).wait(
            self.page, timeout=timeout or self.timeouts["medium"]
        )

    @allure.step("Verify successful login")
    async def verify_successful_login(self) -> bool:
        """Heading and main content both visible. Never raises."""
        heading_visible = await self.is_empsd_heading_visible()
        main_visible = await self.is_main_content_visible()
        logger.debug(
            f"Dashboard check: heading_visible={heading_visible}, main_visible={main_visible}"
        )
        return heading_visible and main_visible
