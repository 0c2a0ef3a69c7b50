"""
================================================================================
EMPSD UI Testing
================================================================================

Playwright-based end-to-end tests for the EMPSD web application.

Layout:
    - framework: error taxonomy, SmartLocator, BasePage, readiness, browser
    - pages: LoginPage, DashboardPage and the AuthFlow state machine
    - tests: end-to-end scenarios (opt-in, need a reachable deployment)

================================================================================
"""
