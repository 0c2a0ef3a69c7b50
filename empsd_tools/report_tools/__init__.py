"""
Allure attachment helpers and BUG-prefixed assertions.
"""

from .allure_utils import (
    TestResultSummary,
    attach_json,
    attach_png,
    attach_png_file,
    attach_text,
    summarize_results,
)
from .bug_expect import BugAssertions, bug_expect, create_bug_expect

__all__ = [
    "BugAssertions",
    "TestResultSummary",
    "attach_json",
    "attach_png",
    "attach_png_file",
    "attach_text",
    "bug_expect",
    "create_bug_expect",
    "summarize_results",
]
