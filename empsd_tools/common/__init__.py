"""
================================================================================
EMPSD Tools Common Utilities
================================================================================

Shared configuration, logging, test data and helper utilities.

Exports:
    - ConfigLoader: YAML + environment configuration
    - init_logger / get_logger: Loguru setup
    - load_test_data: Typed access to testdata/test_data.yaml
    - retry_async / with_retry: Exponential-backoff retry
    - clear_browser_data and random data helpers

Usage:
    from empsd_tools.common import ConfigLoader, init_logger

    init_logger()
    base_url = ConfigLoader().base_url

================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .global_config import get_logger, init_logger
from .test_data import LoginScenario, TestData, UserRecord, load_test_data
from .retry import RetryConfig, retry_async, with_retry
from .browser_data import (
    clear_browser_data,
    current_timestamp,
    format_test_name,
    generate_random_email,
    generate_random_string,
)

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "LoginScenario",
    "RetryConfig",
    "TestData",
    "UserRecord",
    "clear_browser_data",
    "current_timestamp",
    "format_test_name",
    "generate_random_email",
    "generate_random_string",
    "get_logger",
    "init_logger",
    "load_test_data",
    "retry_async",
    "with_retry",
]
