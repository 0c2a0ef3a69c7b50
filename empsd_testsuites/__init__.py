"""
Test suites package.

Kept importable so that:
  - IDE navigation resolves page objects and fixtures
  - `run_tests.py` can select suites by package path
  - unit tests can import the shared fakes
"""
