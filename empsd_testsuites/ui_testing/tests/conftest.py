"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the end-to-end suites.

Key Features:
- One browser and one fresh context per test (no shared state between tests)
- Cookies and web storage cleared before every test
- Page Object fixtures for all pages
- Screenshot + locator health capture on failure

================================================================================
"""

from typing import AsyncGenerator, Dict, Tuple

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from empsd_tools.common import (
    ConfigLoader,
    RetryConfig,
    TestData,
    clear_browser_data,
    load_test_data,
    retry_async,
)
from empsd_tools.report_tools import attach_text
from empsd_testsuites.ui_testing.framework.browser_manager import BrowserManager
from empsd_testsuites.ui_testing.framework.errors import NavigationError
from empsd_testsuites.ui_testing.pages import AuthFlow, DashboardPage, LoginPage


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture(scope="session")
def test_data() -> TestData:
    """Typed contents of testdata/test_data.yaml."""
    return load_test_data()


@pytest.fixture(scope="session")
def viewports(config: ConfigLoader) -> Dict[str, Tuple[int, int]]:
    """Viewport presets: name -> (width, height)."""
    return {name: config.viewport(name) for name in config.get_section("viewports")}


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager(config: ConfigLoader) -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Each test launches its own browser so tests stay independent and can be
    distributed across xdist workers.
    """
    async with BrowserManager(config=config) as manager:
        yield manager


@pytest.fixture
async def page(
    browser_manager: BrowserManager, config: ConfigLoader, request
) -> AsyncGenerator[Page, None]:
    """
    Fresh page in an isolated context, with browser data cleared.

    On failure, the page's screenshot and locator health are attached to the
    report before the context is torn down.
    """
    page = await browser_manager.new_page()
    await clear_browser_data(page)
    request.node.page_objects = []
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed and config.get("screenshots.on_failure", True):
        await _capture_failure(request.node, page)


async def _capture_failure(node, page: Page) -> None:
    # Page objects the test used carry the locator health logs
    page_objects = getattr(node, "page_objects", None) or [LoginPage(page)]

    try:
        await page_objects[0].capture_failure(node.name)
        for page_obj in page_objects[1:]:
            attach_text(
                page_obj.get_locator_health_report(),
                name=f"{type(page_obj).__name__} Locator Health",
            )
    except PlaywrightError as e:
        logger.warning(f"Failed to capture failure details: {e}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(page: Page, config: ConfigLoader, request) -> LoginPage:
    login = LoginPage(page, config=config)
    request.node.page_objects.append(login)
    return login


@pytest.fixture
def dashboard_page(page: Page, config: ConfigLoader, request) -> DashboardPage:
    dashboard = DashboardPage(page, config=config)
    request.node.page_objects.append(dashboard)
    return dashboard


@pytest.fixture
def auth_flow(login_page: LoginPage, dashboard_page: DashboardPage) -> AuthFlow:
    return AuthFlow(login_page, dashboard_page)


@pytest.fixture
async def authenticated_dashboard(
    login_page: LoginPage,
    auth_flow: AuthFlow,
    dashboard_page: DashboardPage,
    test_data: TestData,
) -> DashboardPage:
    """DashboardPage after signing in as the admin user."""
    admin = test_data.user("admin")
    # The dev server occasionally drops the first connection
    await retry_async(
        login_page.navigate_to_login,
        config=RetryConfig(max_attempts=3, delay_ms=1000, retry_on=(NavigationError,)),
    )
    await auth_flow.sign_in(admin.email, admin.password)
    return dashboard_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report as item.rep_<phase> for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
