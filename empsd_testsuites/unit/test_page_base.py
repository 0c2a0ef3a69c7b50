from types import SimpleNamespace

import pytest

from empsd_testsuites.ui_testing.framework.errors import NavigationError, WaitTimeoutError
from empsd_testsuites.ui_testing.framework.page_base import MAX_CAPTURED_RESPONSES, BasePage
from empsd_testsuites.ui_testing.framework.smart_locator import LocatorKind, SmartLocator

from .fakes import FakeElement, FakePage


BASE_URL = "https://pln-fe.dev.embrio.id"


class ProfilePage(BasePage):
    URL_PATH = "/profile"


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage([
        FakeElement(key="name", text="Admin", selectors={"#name"}),
        FakeElement(key="save", role="button", name="Simpan", selectors={"#save"}),
    ])


def test_defaults_come_from_config(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)

    assert page_obj.base_url == BASE_URL
    assert page_obj.url == f"{BASE_URL}/profile"
    assert page_obj.timeouts == {"short": 5000, "medium": 10000, "long": 30000, "very_long": 60000}
    assert page_obj.smart.probe_timeout == 5000


def test_injected_smart_locator_is_used(fake_page, config):
    smart = SmartLocator(fake_page, {})
    page_obj = ProfilePage(fake_page, base_url="http://localhost:3000/", smart=smart, config=config)

    assert page_obj.smart is smart
    assert page_obj.base_url == "http://localhost:3000"


@pytest.mark.asyncio
async def test_navigate_defaults_to_page_url(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)

    await page_obj.navigate()

    assert fake_page.visited == [f"{BASE_URL}/profile"]
    assert page_obj.current_url == f"{BASE_URL}/profile"


@pytest.mark.asyncio
async def test_navigate_failure_raises_navigation_error(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)
    fake_page.unreachable.add("https://unreachable.invalid/")

    with pytest.raises(NavigationError, match="unreachable.invalid"):
        await page_obj.navigate("https://unreachable.invalid/")


@pytest.mark.asyncio
async def test_wait_for_load_timeout_is_typed(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)
    fake_page.idle = False

    with pytest.raises(WaitTimeoutError, match="networkidle"):
        await page_obj.wait_for_load(timeout=100)


@pytest.mark.asyncio
async def test_primitives_delegate_to_driver(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)

    assert await page_obj.get_title() == "PLN EMPSD"
    assert await page_obj.get_text("#name") == "Admin"
    assert await page_obj.is_visible("#name") is True
    assert await page_obj.is_visible("#missing") is False

    await page_obj.click("#save")
    await page_obj.fill("#name", "Operator")
    await page_obj.wait(250)
    await page_obj.set_viewport(375, 667)

    assert fake_page.element("save").clicks == 1
    assert fake_page.element("name").value == "Operator"
    assert fake_page.sleeps == [250]
    assert fake_page.viewport == {"width": 375, "height": 667}


@pytest.mark.asyncio
async def test_resolve_by_capability(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)

    locator = page_obj.resolve_by_capability(LocatorKind.ROLE, "button", name="Simpan")
    await locator.click()
    assert fake_page.element("save").clicks == 1

    assert await page_obj.resolve_by_capability("selector", "#name").text_content() == "Admin"

    with pytest.raises(ValueError):
        page_obj.resolve_by_capability("xpath", "//div")


@pytest.mark.asyncio
async def test_screenshot_written_to_configured_dir(fake_page, config, screenshots_dir):
    page_obj = ProfilePage(fake_page, config=config)

    path = await page_obj.screenshot("profile")

    assert path is not None
    assert path.parent == screenshots_dir
    assert path.name.startswith("profile_")
    assert path.read_bytes().startswith(b"\x89PNG")


@pytest.mark.asyncio
async def test_screenshot_disabled_returns_none(fake_page, config, monkeypatch, screenshots_dir):
    monkeypatch.setenv("SCREENSHOTS_ENABLED", "false")
    page_obj = ProfilePage(fake_page, config=config)

    assert await page_obj.screenshot("profile") is None
    assert not screenshots_dir.exists()


@pytest.mark.asyncio
async def test_capture_failure_saves_screenshot(fake_page, config, screenshots_dir):
    page_obj = ProfilePage(fake_page, config=config)

    await page_obj.capture_failure("test_profile")

    assert [p.name.startswith("failure_test_profile_") for p in screenshots_dir.iterdir()] == [True]


def test_only_recent_api_responses_are_kept(fake_page, config):
    page_obj = ProfilePage(fake_page, config=config)
    (handler,) = fake_page.handlers["response"]

    handler(SimpleNamespace(url=f"{BASE_URL}/static/app.js", status=200))
    for i in range(MAX_CAPTURED_RESPONSES + 5):
        handler(SimpleNamespace(url=f"{BASE_URL}/api/items/{i}", status=200))

    captured = page_obj._captured_responses
    assert len(captured) == MAX_CAPTURED_RESPONSES
    assert captured[-1]["url"].endswith(f"/api/items/{MAX_CAPTURED_RESPONSES + 4}")
    assert all("/api/" in r["url"] for r in captured)
