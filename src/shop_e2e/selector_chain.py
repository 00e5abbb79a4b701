"""Selector resolution - first-match-wins over an ordered list of selectors."""

from dataclasses import dataclass
from typing import Callable

from playwright.sync_api import Locator, Page

from .waits import wait_until


def _match_count(page: Page, selector: str) -> int:
    try:
        return page.locator(selector).count()
    except Exception:
        # Selectors the engine cannot parse simply never match
        return 0


def resolve_selector(
    page: Page,
    selectors: list[str] | tuple[str, ...],
    timeout_ms: int = 0,
    sleep: Callable[[float], None] | None = None,
) -> str | None:
    """Return the first selector matching at least one element, or None.

    With a positive timeout, waits until any candidate matches before the
    single ordered pass. Order is significant: earlier selectors win even if
    a later one matched first.
    """
    if timeout_ms > 0:
        kwargs = {"sleep": sleep} if sleep else {}
        wait_until(
            lambda: any(_match_count(page, s) > 0 for s in selectors),
            timeout_ms,
            **kwargs,
        )

    for selector in selectors:
        if _match_count(page, selector) > 0:
            return selector
    return None


@dataclass(frozen=True)
class SelectorChain:
    """A named, prioritised list of selectors for one UI element."""

    name: str
    selectors: tuple[str, ...]

    def resolve(
        self,
        page: Page,
        timeout_ms: int = 0,
        sleep: Callable[[float], None] | None = None,
    ) -> str | None:
        """First matching selector, or None."""
        return resolve_selector(page, self.selectors, timeout_ms, sleep)

    def locate(
        self,
        page: Page,
        timeout_ms: int = 0,
        sleep: Callable[[float], None] | None = None,
    ) -> Locator | None:
        """First element of the first matching selector, or None."""
        selector = self.resolve(page, timeout_ms, sleep)
        if selector is None:
            return None
        return page.locator(selector).first

    def __iter__(self):
        return iter(self.selectors)
