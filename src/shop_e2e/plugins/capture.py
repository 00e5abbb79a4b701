"""Pytest plugin: scenario lifecycle logging and failure artifacts."""

import re
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console
from rich.markup import escape

console = Console()

PAGE_FIXTURES = ["shop_page", "page"]


def _clean(name: str) -> str:
    return re.sub(r"[^\w.-]+", "_", name).strip("_")


def _fixture(request, name: str):
    """Value of a fixture if it can be provided, else None."""
    try:
        return request.getfixturevalue(name)
    except pytest.FixtureLookupError:
        return None


def pytest_bdd_before_scenario(request, feature, scenario):
    console.print(f"[bold blue]=== Starting scenario:[/] {escape(scenario.name)}")


def pytest_bdd_after_scenario(request, feature, scenario):
    state = _fixture(request, "scenario_state")
    if state is not None:
        console.print(f"[dim]Test state: {escape(str(state.as_dict()))}[/]")
    console.print(f"[bold blue]=== Scenario completed:[/] {escape(scenario.name)}")


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    console.print(
        f"[red]✗ Step failed:[/] {escape(step.keyword)} {escape(step.name)}\n"
        f"  [dim]{escape(str(exception))}[/]"
    )
    page = _fixture(request, "shop_page")
    if page is not None:
        capture_failure(page, f"failed-{scenario.name}", _fixture(request, "suite_config"), request.node)


def pytest_runtest_makereport(item, call):
    """Hook to execute after each test phase."""
    if call.when != "call" or call.excinfo is None:
        return

    funcargs = getattr(item, "funcargs", {})
    # Scenario failures were already captured by pytest_bdd_step_error
    if any(name == "screenshot_path" for name, _ in item.user_properties):
        return

    for name in PAGE_FIXTURES:
        if name in funcargs:
            capture_failure(funcargs[name], f"failed-{item.name}", funcargs.get("suite_config"), item)
            break


def capture_failure(page, name: str, config=None, item=None) -> tuple[Path, Path] | None:
    """Save a full-page screenshot and the HTML of the failing page."""
    if config is not None:
        screenshot_dir = config.artifacts.screenshot_dir
        snapshot_dir = config.artifacts.snapshot_dir
    else:
        screenshot_dir, snapshot_dir = Path("reports/screenshots"), Path("reports/snapshots")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base_name = f"{_clean(name)}_{timestamp}"

    try:
        screenshot_dir.mkdir(parents=True, exist_ok=True)
        screenshot = screenshot_dir / f"{base_name}.png"
        page.screenshot(path=str(screenshot), full_page=True)

        snapshot_dir.mkdir(parents=True, exist_ok=True)
        snapshot = snapshot_dir / f"{base_name}.html"
        snapshot.write_text(page.content(), encoding="utf-8")
    except Exception as e:
        # A crashed page must not hide the original failure
        console.print(f"[yellow]Could not capture failure artifacts: {escape(str(e))}[/]")
        return None

    if item is not None:
        item.user_properties.append(("screenshot_path", str(screenshot)))
        item.user_properties.append(("snapshot_path", str(snapshot)))
    console.print(f"[dim]Failure screenshot: {screenshot}[/]")
    return screenshot, snapshot
