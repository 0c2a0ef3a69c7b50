"""
================================================================================
BUG-prefixed Assertions
================================================================================

Wraps Playwright's `expect` so a failing matcher surfaces as a short,
triage-friendly message:

    AssertionError: BUG: Assertion to_have_title failed

instead of Playwright's verbose call log. Pass
`include_original_message=True` to keep the original text after the prefix.

Usage:
    from empsd_tools.report_tools.bug_expect import bug_expect

    await bug_expect(page).to_have_title(re.compile("PLN EMPSD"))
    await bug_expect(locator).not_.to_be_visible()

================================================================================
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Awaitable, Callable

from playwright.async_api import expect as playwright_expect


class BugAssertions:
    """Proxy over a Playwright assertions object that rewrites failures."""

    def __init__(
        self,
        target: Any,
        prefix: str = "BUG",
        include_original_message: bool = False,
    ):
        self._target = target
        self._prefix = prefix
        self._include_original = include_original_message

    def _bug(self, matcher: str, error: AssertionError) -> AssertionError:
        if self._include_original:
            return AssertionError(f"{self._prefix}: {error}")
        return AssertionError(f"{self._prefix}: Assertion {matcher} failed")

    async def _guard(self, matcher: str, awaitable: Awaitable[Any]) -> Any:
        try:
            return await awaitable
        except AssertionError as e:
            raise self._bug(matcher, e) from None

    def __getattr__(self, name: str) -> Any:
        value = getattr(self._target, name)

        # `.not_` returns another assertions object
        if name == "not_":
            return BugAssertions(value, self._prefix, self._include_original)
        if not callable(value):
            return value

        @wraps(value)
        def matcher(*args: Any, **kwargs: Any) -> Any:
            try:
                result = value(*args, **kwargs)
            except AssertionError as e:
                raise self._bug(name, e) from None
            if inspect.isawaitable(result):
                return self._guard(name, result)
            return result

        return matcher


def create_bug_expect(
    prefix: str = "BUG",
    include_original_message: bool = False,
    base_expect: Callable[..., Any] = playwright_expect,
) -> Callable[..., BugAssertions]:
    """Build an `expect`-compatible callable with the given failure prefix."""

    def bug_expect(actual: Any, *args: Any, **kwargs: Any) -> BugAssertions:
        return BugAssertions(
            base_expect(actual, *args, **kwargs),
            prefix=prefix,
            include_original_message=include_original_message,
        )

    return bug_expect


bug_expect = create_bug_expect()


__all__ = [
    "BugAssertions",
    "bug_expect",
    "create_bug_expect",
]
