"""
================================================================================
Authentication Flow
================================================================================

Login-then-verify flow as an explicit state machine:

    UNAUTHENTICATED -> SUBMITTING -> AUTHENTICATED -> READY
                       SUBMITTING -> REJECTED

SUBMITTING -> AUTHENTICATED is inferred only from the dashboard readiness
condition. REJECTED is inferred from the absence of that signal plus the
login form still being on screen.
An attempt that fails with a page-object error returns the flow to its
pre-submit state.

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

import allure
from loguru import logger

from empsd_testsuites.ui_testing.framework.errors import PageObjectError, WaitTimeoutError

from .dashboard_page import DashboardPage
from .login_page import LoginPage


class LoginState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    SUBMITTING = "submitting"
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"
    READY = "ready"


# Allowed transitions
_TRANSITIONS = {
    LoginState.UNAUTHENTICATED: {LoginState.SUBMITTING},
    LoginState.SUBMITTING: {LoginState.AUTHENTICATED, LoginState.REJECTED},
    LoginState.AUTHENTICATED: {LoginState.READY},
    LoginState.REJECTED: {LoginState.SUBMITTING},
    LoginState.READY: set(),
}


class AuthFlow:
    """
    Drives LoginPage + DashboardPage through one sign-in attempt.

    Usage:
        flow = AuthFlow(login_page, dashboard_page)
        await login_page.navigate_to_login()
        state = await flow.sign_in("admin@vhiweb.com", "Admin123@")
        assert state is LoginState.READY
    """

    def __init__(self, login_page: LoginPage, dashboard_page: DashboardPage):
        self.login_page = login_page
        self.dashboard_page = dashboard_page
        self.state = LoginState.UNAUTHENTICATED
        self.history: List[LoginState] = [self.state]

    def _transition(self, new_state: LoginState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid login transition: {self.state.value} -> {new_state.value}")
        logger.debug(f"Login state: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    def _abandon(self, previous: LoginState, error: Exception) -> None:
        logger.warning(
            f"Sign-in attempt abandoned ({type(error).__name__}), "
            f"login state back to: {previous.value}"
        )
        self.state = previous
        self.history.append(previous)

    @allure.step("Sign in (email={email})")
    async def sign_in(
        self,
        email: str,
        password: str,
        timeout: Optional[int] = None,
        toggle_password: bool = True,
    ) -> LoginState:
        """
        Submit credentials and classify the outcome.

        On a page-object failure the attempt is abandoned: the state goes back
        to what it was before submitting and the error propagates.

        Returns:
            READY on success, REJECTED when the form remains after the timeout

        Raises:
            WaitTimeoutError: Neither readiness nor the login form was observed
        """
        previous = self.state
        self._transition(LoginState.SUBMITTING)

        try:
            await self.login_page.login(email, password, toggle_password=toggle_password)
            try:
                await self.dashboard_page.wait_for_dashboard_load(timeout=timeout)
            except WaitTimeoutError:
                if not await self.login_page.is_login_form_visible():
                    raise
                self._transition(LoginState.REJECTED)
                logger.info(f"Login rejected for {email or '<empty>'}")
                return self.state
        except PageObjectError as e:
            self._abandon(previous, e)
            raise

        self._transition(LoginState.AUTHENTICATED)
        if await self.dashboard_page.verify_successful_login():
            self._transition(LoginState.READY)
        logger.info(f"Login for {email or '<empty>'} ended in state: {self.state.value}")
        return self.state


__all__ = [
    "AuthFlow",
    "LoginState",
]
