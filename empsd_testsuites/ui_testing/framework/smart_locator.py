"""
================================================================================
Smart Locator with Semantic-First Fallback
================================================================================

Two-tier element location for page objects:
    - Tier 1: semantic locator (role / label / text / placeholder / test id)
    - Tier 2: structural selector (CSS, comma-separated alternatives)

Every page declares a map of logical element name -> ResolutionPair. Each
operation resolves the semantic tier first; any driver failure on that tier
(not found, or the action failing on the found element) promotes exactly one
retry through the structural tier. After both tiers fail the call site either
degrades to a declared default or raises.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Pattern,
    Tuple,
    TypeVar,
    Union,
)

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .errors import ActionError, ElementNotFoundError


T = TypeVar("T")

# Per-tier wait for is_visible probes
DEFAULT_VISIBILITY_TIMEOUT = 1000

# Sentinel: propagate the failure instead of degrading to a default
RAISE: Any = object()

# Returns true/false for the first alternative that matches, null when none does.
DISABLED_ATTRIBUTE_SCRIPT = """(selectors) => {
    for (const selector of selectors) {
        let el = null;
        try { el = document.querySelector(selector); } catch (_) { continue; }
        if (el) {
            return el.hasAttribute('disabled') || el.getAttribute('aria-disabled') === 'true';
        }
    }
    return null;
}"""


class LocatorKind(str, Enum):
    """Capability used to build a locator."""
    ROLE = "role"
    TEXT = "text"
    LABEL = "label"
    PLACEHOLDER = "placeholder"
    TEST_ID = "test_id"
    SELECTOR = "selector"


@dataclass(frozen=True)
class LocatorSpec:
    """
    Tagged descriptor consumed by `build_locator`.

    Attributes:
        kind: Which capability to resolve by
        value: Role name, text, label, placeholder, test id or selector
        options: Extra keyword options (e.g. role `name`, `exact`, `level`)
    """
    kind: LocatorKind
    value: Union[str, Pattern[str]]
    options: Tuple[Tuple[str, Any], ...] = ()

    def __str__(self) -> str:
        value = getattr(self.value, "pattern", self.value)
        opts = "".join(
            f", {k}={getattr(v, 'pattern', v)!r}" for k, v in self.options
        )
        return f"{self.kind.value}({value!r}{opts})"


def _spec(kind: LocatorKind, value: Union[str, Pattern[str]], **options: Any) -> LocatorSpec:
    return LocatorSpec(kind, value, tuple(sorted(options.items())))


def by_role(role: str, name: Union[str, Pattern[str], None] = None, **options: Any) -> LocatorSpec:
    if name is not None:
        options["name"] = name
    return _spec(LocatorKind.ROLE, role, **options)


def by_text(text: Union[str, Pattern[str]], **options: Any) -> LocatorSpec:
    return _spec(LocatorKind.TEXT, text, **options)


def by_label(label: Union[str, Pattern[str]], **options: Any) -> LocatorSpec:
    return _spec(LocatorKind.LABEL, label, **options)


def by_placeholder(placeholder: Union[str, Pattern[str]], **options: Any) -> LocatorSpec:
    return _spec(LocatorKind.PLACEHOLDER, placeholder, **options)


def by_test_id(test_id: str) -> LocatorSpec:
    return _spec(LocatorKind.TEST_ID, test_id)


def by_selector(selector: str) -> LocatorSpec:
    return _spec(LocatorKind.SELECTOR, selector)


def build_locator(page: Page, spec: LocatorSpec) -> Locator:
    """
    Turn a LocatorSpec into a Playwright Locator.

    Raises:
        ValueError: For a kind this function does not know
    """
    kind = LocatorKind(spec.kind)
    options = dict(spec.options)

    if kind is LocatorKind.ROLE:
        return page.get_by_role(spec.value, **options)
    if kind is LocatorKind.TEXT:
        return page.get_by_text(spec.value, **options)
    if kind is LocatorKind.LABEL:
        return page.get_by_label(spec.value, **options)
    if kind is LocatorKind.PLACEHOLDER:
        return page.get_by_placeholder(spec.value, **options)
    if kind is LocatorKind.TEST_ID:
        return page.get_by_test_id(spec.value)
    if kind is LocatorKind.SELECTOR:
        return page.locator(spec.value, **options)
    raise ValueError(f"Unsupported locator kind: {kind}")


def split_selector(selector: str) -> List[str]:
    """
    Split a selector list on top-level commas.

    Commas inside quotes, brackets or parentheses are kept:
    `button:has-text("a, b"), #login` -> ['button:has-text("a, b")', '#login']
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None

    for char in selector:
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    parts.append("".join(current).strip())
    return [part for part in parts if part]


@dataclass(frozen=True)
class ResolutionPair:
    """
    Semantic locator plus structural selector for one logical element.

    `structural` may list several comma-separated alternatives; they are
    equally valid and the first match in document order wins.
    """
    semantic: LocatorSpec
    structural: str

    @property
    def alternatives(self) -> List[str]:
        return split_selector(self.structural)


@dataclass
class LocatorHealth:
    """
    Tracks which tier resolved an element.

    Attributes:
        element_name: Logical element name
        semantic: The preferred (semantic) locator, rendered as text
        used_fallback: Whether the structural tier was needed
        structural: The structural selector used (if any)
    """
    element_name: str
    semantic: str
    used_fallback: bool = False
    structural: Optional[str] = None


class SmartLocator:
    """
    Element interaction vocabulary shared by all page objects.

    Page objects own one instance (composition) built from their element map:

        >>> smart = SmartLocator(page, LoginPage.ELEMENTS)
        >>> await smart.fill("email_input", "admin@vhiweb.com")
        >>> await smart.is_visible("error_message")
        False

    Call-site policies:
        - click / fill / clear / get_text propagate ElementNotFoundError
          or ActionError after both tiers fail
        - is_visible / is_disabled never raise and resolve to False
    """

    def __init__(
        self,
        page: Page,
        elements: Mapping[str, ResolutionPair],
        probe_timeout: int = 5000,
        action_timeout: int = 5000,
        visibility_timeout: int = DEFAULT_VISIBILITY_TIMEOUT,
    ):
        """
        Args:
            page: Playwright Page object
            elements: Logical element name -> ResolutionPair (copied, read-only)
            probe_timeout: Milliseconds to wait for each tier to resolve
            action_timeout: Milliseconds allowed for the action itself
            visibility_timeout: Milliseconds each tier may take in is_visible
        """
        self.page = page
        self._elements: Mapping[str, ResolutionPair] = MappingProxyType(dict(elements))
        self.probe_timeout = probe_timeout
        self.action_timeout = action_timeout
        self.visibility_timeout = visibility_timeout
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    @property
    def elements(self) -> Mapping[str, ResolutionPair]:
        return self._elements

    def pair(self, element_name: str) -> ResolutionPair:
        """Resolution entry for an element, or ElementNotFoundError."""
        try:
            return self._elements[element_name]
        except KeyError:
            raise ElementNotFoundError(
                f"No locators defined for element: {element_name}"
            ) from None

    # =========================================================================
    # Resolution
    # =========================================================================

    async def resolve(
        self,
        target: Union[LocatorSpec, str],
        timeout: Optional[int] = None,
        state: str = "visible",
    ) -> Optional[Locator]:
        """
        Resolve one tier.

        Args:
            target: LocatorSpec (semantic) or selector string (structural)
            timeout: Milliseconds to wait for the element to reach `state`
            state: 'visible' or 'attached'

        Returns:
            The first matching Locator, or None when nothing matched in time
        """
        if isinstance(target, LocatorSpec):
            locator = build_locator(self.page, target)
        else:
            locator = self.page.locator(target)

        candidate = locator.first
        try:
            await candidate.wait_for(state=state, timeout=timeout or self.probe_timeout)
        except PlaywrightError as e:
            logger.debug(f"Not resolved: {target} ({_first_line(e)})")
            return None
        return candidate

    async def locate(self, element_name: str, timeout: Optional[int] = None) -> Locator:
        """Resolve an element through both tiers and return its Locator."""
        return await self.perform(
            element_name,
            _identity,
            description="locate",
            timeout=timeout,
        )

    async def perform(
        self,
        element_name: str,
        action: Callable[[Locator], Awaitable[T]],
        description: str = "",
        default: Any = RAISE,
        state: str = "visible",
        timeout: Optional[int] = None,
    ) -> T:
        """
        Run `action` on an element: semantic tier, then structural tier.

        Args:
            element_name: Key in the element map
            action: Coroutine function receiving the resolved Locator
            description: Action name for logs and error messages
            default: Value returned when both tiers fail; RAISE to propagate
            state: Element state required before acting
            timeout: Per-tier resolution timeout in milliseconds

        Returns:
            The action's result, or `default`

        Raises:
            ElementNotFoundError: Neither tier resolved (when default is RAISE)
            ActionError: A tier resolved but the action failed (when default is RAISE)
        """
        pair = self.pair(element_name)
        errors: List[str] = []
        resolved_any = False

        for tier, target in (("semantic", pair.semantic), ("structural", pair.structural)):
            locator = await self.resolve(target, timeout=timeout, state=state)
            if locator is None:
                errors.append(f"{tier}: {target} -> not found")
                continue

            resolved_any = True
            try:
                result = await action(locator)
            except PlaywrightError as e:
                errors.append(
                    f"{tier}: {target} -> {description or 'action'} failed: {_first_line(e)}"
                )
                continue

            self._record(element_name, pair, used_fallback=(tier == "structural"))
            return result

        error_msg = (
            f"❌ All locators failed for '{element_name}'"
            f"{f' ({description})' if description else ''}:\n"
            + "\n".join(f"  - {err}" for err in errors)
        )
        if default is not RAISE:
            logger.debug(f"{error_msg}\n  -> resolved to {default!r}")
            return default

        logger.error(error_msg)
        if resolved_any:
            raise ActionError(error_msg)
        raise ElementNotFoundError(error_msg)

    # =========================================================================
    # Interactions
    # =========================================================================

    async def click(self, element_name: str, timeout: Optional[int] = None, **kwargs: Any) -> None:
        """Click element; propagates after both tiers fail."""
        action_timeout = timeout or self.action_timeout
        await self.perform(
            element_name,
            lambda loc: loc.click(timeout=action_timeout, **kwargs),
            description="click",
            timeout=timeout,
        )

    async def fill(
        self,
        element_name: str,
        value: str,
        timeout: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Fill input element; propagates after both tiers fail."""
        action_timeout = timeout or self.action_timeout
        await self.perform(
            element_name,
            lambda loc: loc.fill(value, timeout=action_timeout, **kwargs),
            description="fill",
            timeout=timeout,
        )

    async def clear(self, element_name: str, timeout: Optional[int] = None) -> None:
        """Clear input element; propagates after both tiers fail."""
        action_timeout = timeout or self.action_timeout
        await self.perform(
            element_name,
            lambda loc: loc.clear(timeout=action_timeout),
            description="clear",
            timeout=timeout,
        )

    async def get_text(self, element_name: str, timeout: Optional[int] = None) -> str:
        """
        Text content of element.

        Raises:
            ElementNotFoundError: When neither tier matches
        """
        action_timeout = timeout or self.action_timeout

        async def read(loc: Locator) -> str:
            return await loc.text_content(timeout=action_timeout) or ""

        return await self.perform(element_name, read, description="get_text", timeout=timeout)

    async def is_visible(self, element_name: str, timeout: Optional[int] = None) -> bool:
        """
        Whether the element is visible. Never raises.

        False means "not observed", not "confirmed absent".
        """
        return await self.perform(
            element_name,
            lambda loc: loc.is_visible(),
            description="is_visible",
            default=False,
            timeout=timeout or self.visibility_timeout,
        )

    async def probe_disabled(self, element_name: str, timeout: Optional[int] = None) -> Optional[bool]:
        """
        Disabled state of an element, or None when it cannot be observed.

        Strategies in order: semantic tier, structural tier, then raw
        `disabled` / `aria-disabled` attribute inspection in the page.
        """
        action_timeout = timeout or self.action_timeout
        result = await self.perform(
            element_name,
            lambda loc: loc.is_disabled(timeout=action_timeout),
            description="is_disabled",
            default=None,
            state="attached",
            timeout=timeout,
        )
        if result is not None:
            return result

        pair = self.pair(element_name)
        try:
            inspected = await self.page.evaluate(DISABLED_ATTRIBUTE_SCRIPT, pair.alternatives)
        except PlaywrightError as e:
            logger.debug(f"Attribute inspection failed for '{element_name}': {e}")
            return None
        return None if inspected is None else bool(inspected)

    async def is_disabled(self, element_name: str, timeout: Optional[int] = None) -> bool:
        """Whether the element is disabled. Never raises; unobservable -> False."""
        return await self.probe_disabled(element_name, timeout) is True

    # =========================================================================
    # Health Reporting
    # =========================================================================

    def _record(self, element_name: str, pair: ResolutionPair, used_fallback: bool) -> None:
        health = LocatorHealth(
            element_name=element_name,
            semantic=str(pair.semantic),
            used_fallback=used_fallback,
            structural=pair.structural if used_fallback else None,
        )
        self._health_records.append(health)

        if used_fallback:
            logger.warning(
                f"⚠️ Element '{element_name}' used fallback: structural -> {pair.structural}"
            )
            self._fallback_used[element_name] = health
        else:
            logger.debug(f"✅ Element '{element_name}' found: {pair.semantic}")

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    def get_health_report(self) -> str:
        """
        Report elements whose semantic locator needed the structural fallback.

        Those are maintenance candidates: the accessible name or role drifted.
        """
        if not self._fallback_used:
            return "✅ All elements resolved semantically. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "The following elements fell back to structural selectors.",
            "Consider updating their semantic locators:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed semantic: {health.semantic}",
                f"    Used: {health.structural}",
                "",
            ])

        return "\n".join(report_lines)


def _first_line(error: Exception) -> str:
    lines = str(error).splitlines()
    return lines[0][:80] if lines else type(error).__name__


async def _identity(locator: Locator) -> Locator:
    return locator


__all__ = [
    "DEFAULT_VISIBILITY_TIMEOUT",
    "DISABLED_ATTRIBUTE_SCRIPT",
    "LocatorHealth",
    "LocatorKind",
    "LocatorSpec",
    "RAISE",
    "ResolutionPair",
    "SmartLocator",
    "build_locator",
    "by_label",
    "by_placeholder",
    "by_role",
    "by_selector",
    "by_test_id",
    "by_text",
    "split_selector",
]
