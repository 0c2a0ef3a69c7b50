"""
================================================================================
Readiness Detection
================================================================================

Wait until a screen is actually interactive, not merely navigated to.

Every wait goes through one primitive, `poll_until`: an async predicate is
evaluated at a fixed interval until it holds or a deadline passes. Conditions
over rendered content (ReadinessCondition) are expressed as such predicates.

Usage:
    condition = heading_contains("EMPSD")
    await condition.wait(page, timeout=10000)

    await poll_until(lambda: condition.is_met(page), WaitConfig(timeout_ms=5000))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .errors import WaitTimeoutError


DEFAULT_HEADING_SELECTOR = 'h1, h2, [data-testid="page-title"]'


@dataclass
class WaitConfig:
    """
    Configuration for poll_until.

    Attributes:
        timeout_ms: Deadline for the whole wait
        interval_ms: Pause between predicate evaluations
    """
    timeout_ms: int = 10000
    interval_ms: int = 250


async def poll_until(
    predicate: Callable[[], Awaitable[bool]],
    config: Optional[WaitConfig] = None,
    description: str = "condition",
) -> None:
    """
    Evaluate `predicate` until it returns True or the deadline passes.

    Driver errors raised by the predicate count as "not yet". Cancelling the
    surrounding task stops the wait.

    Raises:
        WaitTimeoutError: When the deadline passes first
    """
    config = config or WaitConfig()
    loop = asyncio.get_running_loop()
    deadline = loop.time() + config.timeout_ms / 1000
    attempts = 0

    while True:
        attempts += 1
        try:
            if await predicate():
                logger.debug(f"Condition met after {attempts} attempt(s): {description}")
                return
        except PlaywrightError as e:
            logger.debug(f"Predicate error (treated as not met) for {description}: {e}")

        remaining = deadline - loop.time()
        if remaining <= 0:
            raise WaitTimeoutError(
                f"Timed out after {config.timeout_ms}ms waiting for {description} "
                f"({attempts} attempts)"
            )
        await asyncio.sleep(min(config.interval_ms / 1000, remaining))


@dataclass(frozen=True)
class ReadinessCondition:
    """
    "Some element matching `selector` has text containing `text`."

    Attributes:
        text: Target substring
        selector: Elements whose text is inspected
    """
    text: str
    selector: str = DEFAULT_HEADING_SELECTOR

    @property
    def description(self) -> str:
        return f"heading containing '{self.text}'"

    def matches(self, texts: Iterable[Optional[str]]) -> bool:
        """True when any rendered text contains the target substring."""
        return any(self.text in (text or "") for text in texts)

    async def is_met(self, page: Page) -> bool:
        """One-shot evaluation against currently rendered content."""
        texts = await page.locator(self.selector).all_text_contents()
        return self.matches(texts)

    async def wait(self, page: Page, timeout: int = 10000, interval_ms: int = 250) -> None:
        """
        Block until the condition holds.

        Raises:
            WaitTimeoutError: When `timeout` ms pass first
        """
        with allure.step(f"Wait for {self.description}"):
            await poll_until(
                lambda: self.is_met(page),
                WaitConfig(timeout_ms=timeout, interval_ms=interval_ms),
                description=self.description,
            )
        logger.debug(f"Ready: {self.description}")


def heading_contains(text: str, selector: str = DEFAULT_HEADING_SELECTOR) -> ReadinessCondition:
    return ReadinessCondition(text=text, selector=selector)


__all__ = [
    "DEFAULT_HEADING_SELECTOR",
    "ReadinessCondition",
    "WaitConfig",
    "heading_contains",
    "poll_until",
]
