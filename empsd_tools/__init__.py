"""
================================================================================
EMPSD Tools
================================================================================

Infrastructure shared by the EMPSD UI suites.

Modules:
    - common: Configuration, logging, test data, retry and browser-data helpers
    - report_tools: Allure attachments and BUG-prefixed assertions

Example:
    from empsd_tools.common import ConfigLoader, init_logger, load_test_data

    init_logger()
    config = ConfigLoader()
    admin = load_test_data().user("admin")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
