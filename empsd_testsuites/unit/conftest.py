"""
================================================================================
Unit Test Configuration
================================================================================

Fixtures for browser-free tests of the page-object layer. Pages run against
the in-memory FakePage from `fakes.py`; configuration is the repository's
config.yaml with screenshots redirected into a temporary directory.

================================================================================
"""

from pathlib import Path
from typing import Generator

import pytest

from empsd_tools.common.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from empsd_testsuites.ui_testing.pages import AuthFlow, DashboardPage, LoginPage

from .fakes import FakePage, dashboard_elements, login_form_elements


@pytest.fixture
def screenshots_dir(tmp_path: Path) -> Path:
    return tmp_path / "screenshots"


@pytest.fixture
def config(monkeypatch, screenshots_dir: Path) -> Generator[ConfigLoader, None, None]:
    """Fresh ConfigLoader over config/config.yaml, isolated from the caller's env."""
    for name in ("EMPSD_CONFIG", "APP_BASE_URL", "SCREENSHOTS_ENABLED", "EXPECTED_HEADING"):
        monkeypatch.delenv(name, raising=False)
    for tier in ("SHORT", "MEDIUM", "LONG", "VERY_LONG"):
        monkeypatch.delenv(f"TIMEOUTS_{tier}", raising=False)
    monkeypatch.setenv("SCREENSHOTS_PATH", str(screenshots_dir))

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=DEFAULT_CONFIG_PATH)
    yield loader
    ConfigLoader.reset()


@pytest.fixture
def login_screen() -> FakePage:
    page = FakePage(login_form_elements())
    page.url = "https://pln-fe.dev.embrio.id/login?redirect=%2F"
    return page


@pytest.fixture
def dashboard_screen() -> FakePage:
    page = FakePage(dashboard_elements())
    page.url = "https://pln-fe.dev.embrio.id/dashboard"
    return page


@pytest.fixture
def login_page(login_screen: FakePage, config: ConfigLoader) -> LoginPage:
    return LoginPage(login_screen, config=config)


@pytest.fixture
def dashboard_page(dashboard_screen: FakePage, config: ConfigLoader) -> DashboardPage:
    return DashboardPage(dashboard_screen, config=config)


@pytest.fixture
def auth_flow(login_screen: FakePage, config: ConfigLoader) -> AuthFlow:
    """AuthFlow whose login and dashboard pages share one FakePage."""
    return AuthFlow(
        LoginPage(login_screen, config=config),
        DashboardPage(login_screen, config=config),
    )
