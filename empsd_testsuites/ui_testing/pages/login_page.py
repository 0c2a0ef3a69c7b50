"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

EMPSD login screen: email + password form with a "Masuk" submit button and a
password visibility toggle.

Every element is reached semantically first (accessible role / name /
placeholder) and structurally second. Inputs are passed through unvalidated;
the form itself decides what is acceptable.

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from empsd_testsuites.ui_testing.framework.page_base import PageBase
from empsd_testsuites.ui_testing.framework.smart_locator import (
    ResolutionPair,
    by_placeholder,
    by_role,
    by_test_id,
)


# Settle time after submitting, before callers look for the outcome
SUBMIT_SETTLE_MS = 1000


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/login?redirect=%2F"
    PAGE_TITLE = "PLN EMPSD"

    ELEMENTS = {
        "email_input": ResolutionPair(
            by_role("textbox", name=re.compile(r"alamat email|email|username", re.I)),
            'input[type="email"], input[name="email"], [placeholder*="email"], [placeholder*="Email"]',
        ),
        "password_input": ResolutionPair(
            by_placeholder(re.compile(r"password|kata sandi", re.I)),
            'input[type="password"], input[name="password"]',
        ),
        "login_button": ResolutionPair(
            by_role("button", name=re.compile(r"masuk|login|sign in", re.I)),
            'button[type="submit"], button:has-text("Masuk"), button:has-text("Login"), '
            'button:has-text("Sign In")',
        ),
        "toggle_password_button": ResolutionPair(
            by_role("button", name=re.compile(r"toggle password visibility|show password", re.I)),
            'button[aria-label*="password"], button:has-text("Toggle password visibility"), '
            'button[title*="password"]',
        ),
        "error_message": ResolutionPair(
            by_role("alert"),
            '.error, .alert, [role="alert"]',
        ),
        "page_title": ResolutionPair(
            by_test_id("page-title"),
            'h1, h2, [data-testid="page-title"]',
        ),
    }

    # =========================================================================
    # Navigation
    # =========================================================================

    @allure.step("Open login page")
    async def navigate_to_login(self, base_url: Optional[str] = None) -> "LoginPage":
        """Navigate to the login page and wait for the network to settle."""
        base = (base_url or self.base_url).rstrip("/")
        await self.navigate(f"{base}{self.URL_PATH}")
        await self.wait_for_load()
        return self

    @allure.step("Open home page")
    async def navigate_to_home(self, base_url: Optional[str] = None) -> "LoginPage":
        """Navigate to the application root (redirects to login when signed out)."""
        await self.navigate(f"{(base_url or self.base_url).rstrip('/')}/")
        await self.wait_for_load()
        return self

    # =========================================================================
    # Form Interactions
    # =========================================================================

    @allure.step("Enter email: {email}")
    async def enter_email(self, email: str) -> None:
        async def focus_and_fill(loc: Locator) -> None:
            await loc.click(timeout=self.smart.action_timeout)
            await loc.fill(email, timeout=self.smart.action_timeout)

        await self.smart.perform("email_input", focus_and_fill, description="enter email")

    @allure.step("Enter password")
    async def enter_password(self, password: str) -> None:
        async def focus_and_fill(loc: Locator) -> None:
            await loc.click(timeout=self.smart.action_timeout)
            await loc.fill(password, timeout=self.smart.action_timeout)

        await self.smart.perform("password_input", focus_and_fill, description="enter password")

    @allure.step("Click login button")
    async def click_login_button(self) -> None:
        await self.smart.click("login_button")

    @allure.step("Toggle password visibility")
    async def toggle_password_visibility(self) -> None:
        await self.smart.click("toggle_password_button")

    @allure.step("Login (email={email})")
    async def login(self, email: str, password: str, toggle_password: bool = True) -> None:
        """
        Fill the form and submit it.

        Not idempotent: each call submits again. Does not wait for the
        dashboard; use DashboardPage.wait_for_dashboard_load or AuthFlow.
        """
        await self.enter_email(email)
        await self.enter_password(password)

        if toggle_password:
            await self.toggle_password_visibility()

        await self.click_login_button()
        logger.info(f"Login submitted for {email or '<empty>'}")
        await self.wait(SUBMIT_SETTLE_MS)

    @allure.step("Clear login form")
    async def clear_form(self) -> None:
        await self.smart.clear("email_input")
        await self.smart.clear("password_input")

    # =========================================================================
    # Reads and Probes
    # =========================================================================

    async def is_login_button_disabled(self) -> bool:
        """True only when the button is observed disabled; never raises."""
        return await self.smart.is_disabled("login_button")

    async def get_error_message(self) -> str:
        return await self.smart.get_text("error_message")

    async def is_error_message_visible(self) -> bool:
        return await self.smart.is_visible("error_message")

    async def get_page_title(self) -> str:
        return await self.smart.get_text("page_title")

    @allure.step("Check login form is visible")
    async def is_login_form_visible(self) -> bool:
        """Email, password and submit controls are all visible."""
        return (
            await self.smart.is_visible("email_input")
            and await self.smart.is_visible("password_input")
            and await self.smart.is_visible("login_button")
        )
