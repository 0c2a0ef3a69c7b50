"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the page objects and test hooks, and a small
result summarizer used by `run_tests.py` after a run.

================================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(png: bytes, name: str = "Screenshot"):
    """Attach raw PNG bytes (e.g. `await page.screenshot()`)."""
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_png_file(path: Path, name: str = None):
    """Attach a PNG already written to disk."""
    with open(path, "rb") as f:
        attach_png(f.read(), name=name or Path(path).stem)


# ================================================================================
# Result Summary
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    __test__ = False

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


def parse_results(results_dir: Path) -> List[Dict[str, Any]]:
    """Parse `*-result.json` files from an allure-results directory."""
    results = []

    for result_file in Path(results_dir).glob("*-result.json"):
        try:
            with open(result_file, encoding="utf-8") as f:
                results.append(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")

    return results


def summarize_results(results_dir: Path) -> TestResultSummary:
    """
    Build a TestResultSummary from an allure-results directory.

    Args:
        results_dir: Allure results directory

    Returns:
        TestResultSummary object
    """
    summary = TestResultSummary()

    for result in parse_results(results_dir):
        summary.total += 1
        status = result.get("status", "unknown")
        if status == "passed":
            summary.passed += 1
        elif status == "failed":
            summary.failed += 1
        elif status == "broken":
            summary.broken += 1
        elif status == "skipped":
            summary.skipped += 1
        else:
            summary.unknown += 1

        summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

    return summary
