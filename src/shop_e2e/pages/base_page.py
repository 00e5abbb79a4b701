"""Base page object shared by every page of the shop."""

import re
from datetime import datetime
from pathlib import Path
from urllib.parse import urljoin

from playwright.sync_api import Locator, Page, Response
from rich.console import Console
from rich.markup import escape

from ..config import SuiteConfig
from ..selector_chain import SelectorChain
from ..waits import wait_until

console = Console()


COOKIE_CONSENT = SelectorChain("cookie consent", (
    '[data-testid="uc-accept-all-button"]',
    "#uc-btn-accept-banner",
    'button:has-text("Accept")',
    'button:has-text("Akzeptieren")',
    'button:has-text("Alle akzeptieren")',
    ".cookie-accept",
    ".accept-all",
    '[id*="accept"]',
    '[class*="accept"]',
))


class BasePage:
    """Navigation, pacing and interaction helpers used by all page objects."""

    def __init__(self, page: Page, config: SuiteConfig):
        self.page = page
        self.config = config

    # ---- pacing -------------------------------------------------------

    def pause(self, ms: int) -> None:
        """Fixed pause, scaled by the pacing factor."""
        scaled = ms * self.config.pacing.factor
        if scaled > 0:
            self.page.wait_for_timeout(scaled)

    def _sleep(self, seconds: float) -> None:
        # Keeps Playwright's event loop running while polling
        self.page.wait_for_timeout(seconds * 1000)

    def wait_for(self, condition, timeout_ms: int | None = None) -> bool:
        """Poll a condition with backoff; returns False on timeout."""
        timeout = self.config.timeouts.element if timeout_ms is None else timeout_ms
        return wait_until(condition, timeout, sleep=self._sleep)

    # ---- navigation ---------------------------------------------------

    def url_for(self, path: str = "") -> str:
        return urljoin(self.config.base_url.rstrip("/") + "/", path.lstrip("/"))

    def visit(self, path: str = "") -> Response | None:
        """Open ``base_url + path`` without waiting for the load event.

        HTTP error statuses are logged, never raised.
        """
        url = self.url_for(path)
        self.page.set_extra_http_headers({"Accept-Language": self.config.accept_language})
        response = self.page.goto(
            url,
            wait_until="commit",
            timeout=self.config.timeouts.page_load,
        )
        if response is not None and response.status >= 400:
            self.warn(f"{url} answered with HTTP {response.status}")
        self.pause(self.config.pacing.settle)
        self.wait_for_page_load()
        return response

    def wait_for_page_load(self) -> None:
        """Wait until the document root exists; does not wait for load complete."""
        found = self.wait_for(
            lambda: self.page.locator("body").count() > 0,
            self.config.timeouts.command,
        )
        assert found, f"Document body never appeared on {self.page.url}"
        self.pause(self.config.pacing.page_load)

    def get_current_url(self) -> str:
        return self.page.url

    def reload_page(self) -> None:
        self.page.reload(wait_until="commit", timeout=self.config.timeouts.page_load)
        self.pause(self.config.pacing.settle)

    def scroll_by(self, y: int) -> None:
        self.page.mouse.wheel(0, y)

    # ---- elements -----------------------------------------------------

    def get_by_test_id(self, test_id: str) -> Locator:
        return self.page.locator(f'[data-testid="{test_id}"]')

    def element_exists(self, selector: str) -> bool:
        return self.page.locator(selector).count() > 0

    def first_matching(self, chain: SelectorChain, timeout_ms: int = 0) -> str | None:
        """Resolve a selector chain against the current page."""
        return chain.resolve(self.page, timeout_ms, sleep=self._sleep)

    def get_element_with_retry(self, selector: str, timeout_ms: int | None = None) -> Locator:
        """First element for ``selector``, polling until it is attached."""
        found = self.wait_for(lambda: self.element_exists(selector), timeout_ms)
        assert found, f"Element not found: {selector}"
        return self.page.locator(selector).first

    def wait_for_element(self, selector: str, timeout_ms: int | None = None) -> Locator:
        """Wait until the first element for ``selector`` is visible."""
        timeout = self.config.timeouts.element if timeout_ms is None else timeout_ms
        locator = self.page.locator(selector).first
        locator.wait_for(state="visible", timeout=timeout)
        return locator

    def verify_element_visible(self, selector: str) -> None:
        assert self.page.locator(selector).first.is_visible(), f"Element not visible: {selector}"

    def verify_element_text(self, selector: str, text: str) -> None:
        actual = self.page.locator(selector).first.inner_text()
        assert text in actual, f"Expected {text!r} in {selector}, got {actual!r}"

    def scroll_to_element(self, selector: str) -> None:
        self.page.locator(selector).first.scroll_into_view_if_needed()
        self.pause(self.config.pacing.before_click)

    def click_element(self, selector: str) -> None:
        """Click like a person: wait, check, pause, hover, click."""
        pacing = self.config.pacing
        locator = self.wait_for_element(selector)
        assert locator.is_enabled(), f"Element is disabled: {selector}"

        self.pause(pacing.before_click)
        locator.hover()
        self.pause(pacing.hover)
        locator.click()
        self.pause(pacing.after_click)

    def type_text(self, selector: str, text: str) -> None:
        """Clear a field and type into it one keystroke at a time."""
        pacing = self.config.pacing
        locator = self.wait_for_element(selector)
        assert locator.is_enabled(), f"Element is disabled: {selector}"
        locator.clear()
        self.pause(pacing.after_clear)
        locator.press_sequentially(text, delay=pacing.keystroke_delay * pacing.factor)

    # ---- page chrome --------------------------------------------------

    def handle_cookie_consent(self) -> int:
        """Click every consent button that is present; returns the click count."""
        pacing = self.config.pacing
        self.pause(pacing.cookie_banner)

        clicked = 0
        for selector in COOKIE_CONSENT:
            locator = self.page.locator(selector)
            if locator.count() == 0:
                continue
            self.pause(pacing.cookie_before_click)
            try:
                locator.first.click(force=True, timeout=self.config.timeouts.element)
            except Exception as e:
                # A banner layer can disappear once another one is accepted
                self.warn(f"Consent button {selector} not clickable: {e}")
                continue
            clicked += 1
            self.pause(pacing.cookie_after_click)

        if clicked:
            self.log(f"Accepted {clicked} cookie consent layer(s)")
        return clicked

    def take_screenshot(self, name: str) -> Path:
        """Full-page screenshot into the configured screenshot directory."""
        directory = self.config.artifacts.screenshot_dir
        directory.mkdir(parents=True, exist_ok=True)
        clean_name = re.sub(r"[^\w.-]+", "_", name).strip("_") or "screenshot"
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = directory / f"{clean_name}_{timestamp}.png"
        self.page.screenshot(path=str(path), full_page=True)
        return path

    # ---- logging ------------------------------------------------------

    def log(self, message: str) -> None:
        console.print(f"[dim]{escape(message)}[/]")

    def warn(self, message: str) -> None:
        console.print(f"[yellow]Warning:[/] {escape(message)}")
