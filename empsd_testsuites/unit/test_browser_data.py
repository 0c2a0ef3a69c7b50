import re

import pytest
from playwright.async_api import Error as PlaywrightError

from empsd_tools.common.browser_data import (
    CLEAR_STORAGE_INIT_SCRIPT,
    clear_browser_data,
    current_timestamp,
    format_test_name,
    generate_random_email,
    generate_random_string,
)

from .fakes import FakePage


@pytest.mark.asyncio
async def test_clear_browser_data_on_http_page():
    page = FakePage()
    page.url = "https://pln-fe.dev.embrio.id/dashboard"

    await clear_browser_data(page)

    assert page.context.cookies_cleared == 1
    assert page.storage_cleared == 1
    assert page.context.init_scripts == [CLEAR_STORAGE_INIT_SCRIPT]


@pytest.mark.asyncio
async def test_clear_browser_data_on_blank_page_skips_storage():
    page = FakePage()

    await clear_browser_data(page)

    assert page.context.cookies_cleared == 1
    assert page.storage_cleared == 0
    assert len(page.context.init_scripts) == 1


@pytest.mark.asyncio
async def test_storage_errors_are_tolerated():
    page = FakePage()
    page.url = "https://pln-fe.dev.embrio.id/"
    page.evaluate_error = PlaywrightError("SecurityError: access denied")

    await clear_browser_data(page)

    assert page.context.cookies_cleared == 1


def test_random_data_helpers():
    email = generate_random_email()
    assert re.fullmatch(r"test_\d+_[a-z0-9]{6}@test\.com", email)
    assert generate_random_email("vhiweb.com").endswith("@vhiweb.com")
    assert len(generate_random_string()) == 8
    assert generate_random_string(16).isalnum()
    assert current_timestamp().endswith("+00:00")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("loginWithInvalidEmail", "Login With Invalid Email"),
        ("test_valid_login", "Test valid login"),
        ("dashboard", "Dashboard"),
    ],
)
def test_format_test_name(name, expected):
    assert format_test_name(name) == expected
