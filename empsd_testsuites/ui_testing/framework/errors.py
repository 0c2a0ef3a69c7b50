"""
Page object error taxonomy.

Only driver-level failures (Playwright errors) are translated into these;
programming errors are never caught by the framework.
"""


class PageObjectError(Exception):
    """Base class for page object failures."""
    pass


class NavigationError(PageObjectError):
    """Raised when a URL cannot be reached within the driver's timeout."""
    pass


class ElementNotFoundError(PageObjectError):
    """Raised when neither the semantic nor the structural locator matches."""
    pass


class ActionError(PageObjectError):
    """Raised when an element resolved but the click/fill/read on it failed."""
    pass


class WaitTimeoutError(PageObjectError, TimeoutError):
    """Raised when a load-state or readiness wait exceeds its deadline."""
    pass


__all__ = [
    "ActionError",
    "ElementNotFoundError",
    "NavigationError",
    "PageObjectError",
    "WaitTimeoutError",
]
