"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based page object framework for the EMPSD web application.

Components:
    - errors: NavigationError, ElementNotFoundError, ActionError, WaitTimeoutError
    - smart_locator: Semantic-first element resolution with structural fallback
    - page_base: Base page object (navigation, primitives, screenshots)
    - readiness: Poll-with-deadline and rendered-content readiness conditions
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    ActionError,
    ElementNotFoundError,
    NavigationError,
    PageObjectError,
    WaitTimeoutError,
)
from .smart_locator import (
    LocatorKind,
    LocatorSpec,
    ResolutionPair,
    SmartLocator,
    by_label,
    by_placeholder,
    by_role,
    by_selector,
    by_test_id,
    by_text,
)
from .page_base import BasePage
from .readiness import ReadinessCondition, WaitConfig, heading_contains, poll_until
from .browser_manager import BrowserManager

__all__ = [
    "ActionError",
    "BasePage",
    "BrowserManager",
    "ElementNotFoundError",
    "LocatorKind",
    "LocatorSpec",
    "NavigationError",
    "PageObjectError",
    "ReadinessCondition",
    "ResolutionPair",
    "SmartLocator",
    "WaitConfig",
    "WaitTimeoutError",
    "by_label",
    "by_placeholder",
    "by_role",
    "by_selector",
    "by_test_id",
    "by_text",
    "heading_contains",
    "poll_until",
]
