"""
Repository-level pytest configuration.

Responsibilities:
  - Initialize Loguru once per session from config/config.yaml
  - Gate end-to-end tests: they drive a live deployment, so they only run
    with `--run-e2e` or EMPSD_RUN_E2E=1
  - Expose the repository root to fixtures

Credentials and URLs live in config/config.yaml and testdata/test_data.yaml and
can be overridden per environment (APP_BASE_URL, CREDENTIALS_VALID_PASSWORD, ...).
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from empsd_tools.common import init_logger


E2E_ENV_FLAG = "EMPSD_RUN_E2E"


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests against the configured EMPSD deployment",
    )


def pytest_configure(config):
    init_logger()


def e2e_enabled(config) -> bool:
    return bool(config.getoption("--run-e2e")) or os.environ.get(E2E_ENV_FLAG, "").lower() in (
        "1",
        "true",
        "yes",
    )


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config, items):
    """Runs after location-based markers are applied."""
    if e2e_enabled(config):
        return

    skip_e2e = pytest.mark.skip(reason=f"e2e test: pass --run-e2e or set {E2E_ENV_FLAG}=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
