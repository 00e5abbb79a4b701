"""Pytest plugin that configures Playwright for the shop suite.

Builds on the ``pytest-playwright`` fixtures: launch flags, context options
and a ready-to-use ``shop_page`` with a clean session.
"""

import json
from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from rich.console import Console
from rich.markup import escape

from ..config import SuiteConfig, load_config

console = Console()

STEALTH_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined, configurable: true });
Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
Object.defineProperty(navigator, 'languages', { get: () => %s });
"""

CLEAR_STORAGE_SCRIPT = """
() => {
  try { window.localStorage.clear(); window.sessionStorage.clear(); } catch (e) {}
}
"""


def accept_languages(header: str) -> list[str]:
    """Language tags from an Accept-Language header, without q-values."""
    return [part.split(";")[0].strip() for part in header.split(",") if part.strip()]


def stealth_script(config: SuiteConfig) -> str:
    return STEALTH_SCRIPT % json.dumps(accept_languages(config.accept_language))


def pytest_addoption(parser):
    group = parser.getgroup("shop_e2e", "Shop E2E suite")
    group.addoption(
        "--shop-config",
        action="store",
        default=None,
        help="Path to the shop_e2e YAML config file",
    )


@pytest.fixture(scope="session")
def suite_config(pytestconfig) -> SuiteConfig:
    """Suite configuration from YAML and environment."""
    config_path = pytestconfig.getoption("shop_config", None)
    return load_config(Path(config_path) if config_path else None)


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args, suite_config):
    """Launch flags that hide automation markers and relax web security."""
    browser = suite_config.browser
    args = [*browser_type_launch_args.get("args", []), *browser.launch_args]
    return {
        **browser_type_launch_args,
        "args": args,
        "ignore_default_args": browser.ignore_default_args,
    }


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, suite_config):
    """Context options: base URL, viewport, locale and language header."""
    return {
        **browser_context_args,
        "base_url": suite_config.base_url,
        "viewport": {
            "width": suite_config.viewport.width,
            "height": suite_config.viewport.height,
        },
        "locale": suite_config.locale,
        "extra_http_headers": {"Accept-Language": suite_config.accept_language},
        "bypass_csp": suite_config.browser.bypass_csp,
        "ignore_https_errors": True,
    }


def _log_page_error(error: PlaywrightError) -> None:
    # Script errors on the shop are noise for these scenarios
    console.print(f"[dim]Uncaught page exception: {escape(str(error))}[/]")


@pytest.fixture
def shop_page(page: Page, suite_config: SuiteConfig) -> Page:
    """Playwright page with timeouts, stealth script and an empty session."""
    page.set_default_timeout(suite_config.timeouts.command)
    page.set_default_navigation_timeout(suite_config.timeouts.page_load)
    page.on("pageerror", _log_page_error)
    page.add_init_script(stealth_script(suite_config))

    page.context.clear_cookies()
    page.evaluate(CLEAR_STORAGE_SCRIPT)
    return page
