"""
In-memory stand-ins for the subset of the Playwright async API the framework
uses. Elements are plain records; locators are lazy and query the element
list each time they act, like real Playwright locators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Pattern, Set, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from empsd_tools.common.browser_data import CLEAR_STORAGE_SCRIPT
from empsd_testsuites.ui_testing.framework.smart_locator import (
    DISABLED_ATTRIBUTE_SCRIPT,
    split_selector,
)


FAKE_PNG = b"\x89PNG\r\n\x1a\nfake"


@dataclass
class FakeElement:
    """A rendered element: accessibility data plus the selectors it matches."""
    key: str
    text: str = ""
    role: Optional[str] = None
    name: Optional[str] = None
    label: Optional[str] = None
    placeholder: Optional[str] = None
    test_id: Optional[str] = None
    selectors: Set[str] = field(default_factory=set)
    visible: bool = True
    disabled: bool = False
    broken: bool = False
    value: str = ""
    clicks: int = 0


def _text_matches(actual: Optional[str], expected: Union[str, Pattern[str], None]) -> bool:
    if expected is None:
        return True
    if actual is None:
        return False
    if hasattr(expected, "search"):
        return expected.search(actual) is not None
    return expected.lower() in actual.lower()


class FakeLocator:
    def __init__(self, page: "FakePage", matcher: Callable[[FakeElement], bool], description: str):
        self._page = page
        self._matcher = matcher
        self.description = description

    @property
    def first(self) -> "FakeLocator":
        return self

    def _matches(self) -> List[FakeElement]:
        return [el for el in self._page.elements if self._matcher(el)]

    def _element(self) -> Optional[FakeElement]:
        matches = self._matches()
        return matches[0] if matches else None

    def _require(self, timeout: Optional[int] = None) -> FakeElement:
        element = self._element()
        if element is None:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {self.description}"
            )
        return element

    def _act(self, action: str, timeout: Optional[int]) -> FakeElement:
        element = self._require(timeout)
        self._page.actions.append((action, element.key))
        if element.broken:
            raise PlaywrightError(f"Element is not attached to the DOM ({element.key})")
        return element

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self._page.waits.append((self.description, state, timeout))
        element = self._element()
        if element is None or (state == "visible" and not element.visible):
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {self.description} to be {state}"
            )

    async def click(self, timeout: Optional[int] = None, **kwargs: Any) -> None:
        element = self._act("click", timeout)
        element.clicks += 1
        handler = self._page.on_click.get(element.key)
        if handler is not None:
            handler()

    async def fill(self, value: str, timeout: Optional[int] = None, **kwargs: Any) -> None:
        self._act("fill", timeout).value = value

    async def clear(self, timeout: Optional[int] = None) -> None:
        self._act("clear", timeout).value = ""

    async def text_content(self, timeout: Optional[int] = None) -> Optional[str]:
        return self._act("text_content", timeout).text

    async def is_visible(self) -> bool:
        element = self._element()
        return element is not None and element.visible

    async def is_disabled(self, timeout: Optional[int] = None) -> bool:
        return self._act("is_disabled", timeout).disabled

    async def count(self) -> int:
        return len(self._matches())

    async def all_text_contents(self) -> List[str]:
        return [el.text for el in self._matches()]


class FakeContext:
    def __init__(self) -> None:
        self.cookies_cleared = 0
        self.init_scripts: List[str] = []

    async def clear_cookies(self) -> None:
        self.cookies_cleared += 1

    async def add_init_script(self, script: Optional[str] = None, path: Optional[str] = None) -> None:
        self.init_scripts.append(script or "")


class FakePage:
    """
    Minimal async Page.

    Attributes:
        elements: Rendered elements in document order
        unreachable: URLs for which goto raises a driver error
        idle: When False, wait_for_load_state times out
    """

    def __init__(self, elements: Optional[List[FakeElement]] = None, title: str = "PLN EMPSD"):
        self.elements: List[FakeElement] = list(elements or [])
        self.title_text = title
        self.url = "about:blank"
        self.unreachable: Set[str] = set()
        self.idle = True
        self.context = FakeContext()
        self.viewport: Optional[Dict[str, int]] = None
        self.visited: List[str] = []
        self.actions: List[tuple] = []
        self.waits: List[tuple] = []
        self.sleeps: List[int] = []
        self.handlers: Dict[str, List[Callable]] = {}
        self.storage_cleared = 0
        self.evaluate_error: Optional[Exception] = None
        # element key -> callback run after a successful click (screen changes)
        self.on_click: Dict[str, Callable[[], None]] = {}

    def add(self, *elements: FakeElement) -> "FakePage":
        self.elements.extend(elements)
        return self

    def element(self, key: str) -> FakeElement:
        return next(el for el in self.elements if el.key == key)

    def remove(self, key: str) -> None:
        self.elements = [el for el in self.elements if el.key != key]

    def show(self, elements: List[FakeElement], url: Optional[str] = None) -> None:
        """Replace the rendered screen, e.g. after a redirect."""
        self.elements = list(elements)
        if url is not None:
            self.url = url

    # Locator builders -------------------------------------------------------

    def get_by_role(self, role: str, name: Any = None, **options: Any) -> FakeLocator:
        return FakeLocator(
            self,
            lambda el: el.role == role and _text_matches(el.name, name),
            f"role={role} name={name}",
        )

    def get_by_text(self, text: Any, **options: Any) -> FakeLocator:
        return FakeLocator(self, lambda el: _text_matches(el.text, text), f"text={text}")

    def get_by_label(self, label: Any, **options: Any) -> FakeLocator:
        return FakeLocator(self, lambda el: _text_matches(el.label, label), f"label={label}")

    def get_by_placeholder(self, placeholder: Any, **options: Any) -> FakeLocator:
        return FakeLocator(
            self, lambda el: _text_matches(el.placeholder, placeholder), f"placeholder={placeholder}"
        )

    def get_by_test_id(self, test_id: str) -> FakeLocator:
        return FakeLocator(self, lambda el: el.test_id == test_id, f"test_id={test_id}")

    def locator(self, selector: str, **options: Any) -> FakeLocator:
        alternatives = set(split_selector(selector))
        return FakeLocator(self, lambda el: bool(el.selectors & alternatives), selector)

    # Page-level API ---------------------------------------------------------

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[int] = None) -> None:
        if url in self.unreachable:
            raise PlaywrightError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self.url = url
        self.visited.append(url)

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        if not self.idle:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {state}")

    async def wait_for_timeout(self, ms: int) -> None:
        self.sleeps.append(ms)

    async def title(self) -> str:
        return self.title_text

    async def set_viewport_size(self, viewport_size: Dict[str, int]) -> None:
        self.viewport = dict(viewport_size)

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if path:
            Path(path).write_bytes(FAKE_PNG)
        return FAKE_PNG

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        if self.evaluate_error is not None:
            raise self.evaluate_error
        if expression == DISABLED_ATTRIBUTE_SCRIPT:
            for selector in arg:
                for el in self.elements:
                    if selector in el.selectors:
                        return el.disabled
            return None
        if expression == CLEAR_STORAGE_SCRIPT:
            self.storage_cleared += 1
            return None
        raise NotImplementedError(expression)


# =============================================================================
# Rendered screens
# =============================================================================

def login_form_elements() -> List[FakeElement]:
    """The EMPSD login form with accessible names intact."""
    return [
        FakeElement(
            key="email",
            role="textbox",
            name="Alamat email",
            placeholder="Alamat email",
            selectors={'input[type="email"]', 'input[name="email"]'},
        ),
        FakeElement(
            key="password",
            placeholder="Password",
            selectors={'input[type="password"]', 'input[name="password"]'},
        ),
        FakeElement(
            key="toggle",
            role="button",
            name="Toggle password visibility",
            selectors={'button[aria-label*="password"]'},
        ),
        FakeElement(
            key="submit",
            role="button",
            name="Masuk",
            text="Masuk",
            selectors={'button[type="submit"]', 'button:has-text("Masuk")'},
        ),
        FakeElement(
            key="title",
            role="heading",
            name="Selamat Datang",
            text="Selamat Datang",
            selectors={"h1"},
        ),
    ]


def dashboard_elements(heading: str = "Welcome to EMPSD Dashboard") -> List[FakeElement]:
    """The EMPSD dashboard after a successful login."""
    return [
        FakeElement(
            key="nav",
            role="navigation",
            selectors={"nav"},
        ),
        FakeElement(
            key="user_menu",
            test_id="user-menu",
            text="Admin",
            selectors={'[data-testid="user-menu"]', ".user-menu"},
        ),
        FakeElement(
            key="logout",
            role="button",
            name="Keluar",
            text="Keluar",
            selectors={'button:has-text("Keluar")'},
        ),
        FakeElement(
            key="heading",
            role="heading",
            name=heading,
            text=heading,
            selectors={"h1", 'h1:has-text("EMPSD")'} if "EMPSD" in heading else {"h1"},
        ),
        FakeElement(
            key="main",
            role="main",
            selectors={"main"},
        ),
    ]
