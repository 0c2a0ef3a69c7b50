"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for EMPSD screens.

Each page class encapsulates:
    - An element resolution map (semantic locator + structural selector)
    - Page-specific actions
    - Verification probes

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .dashboard_page import DashboardPage
from .auth_flow import AuthFlow, LoginState

__all__ = [
    "AuthFlow",
    "DashboardPage",
    "LoginPage",
    "LoginState",
]
