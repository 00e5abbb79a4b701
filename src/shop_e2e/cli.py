"""CLI entry point for Shop E2E."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_config
from .models import RunStatus, TestSummary
from .report import ReportGenerator
from .runner import SuiteRunner

console = Console()


@click.group()
@click.version_option(package_name="shop-e2e")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def main(ctx: click.Context, config_path: str | None) -> None:
    """Shop E2E - BDD browser tests for the shop's cart flow."""
    ctx.ensure_object(dict)
    path = Path(config_path) if config_path else None
    ctx.obj["config_path"] = path
    ctx.obj["config"] = load_config(path)


@main.command()
@click.option("--feature", "-f", type=click.Path(exists=True), help="Feature file or directory")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--browser", "-b", type=click.Choice(["chromium", "firefox", "webkit"]), default=None)
@click.option("--keyword", "-k", help="Only run scenarios matching the expression")
@click.option("--report/--no-report", default=True, help="Generate reports after the run")
@click.pass_context
def run(
    ctx: click.Context,
    feature: str | None,
    headed: bool,
    browser: str | None,
    keyword: str | None,
    report: bool,
) -> None:
    """Run the browser features."""
    config = ctx.obj["config"]
    runner = SuiteRunner(config, ctx.obj["config_path"])

    target = feature or config.features_path
    console.print(f"\n[bold blue]🛒 Running features:[/] {target}")
    console.print(f"[dim]Base URL: {config.base_url}[/]\n")

    success, result_file = runner.run(
        Path(feature) if feature else None,
        headed=headed,
        browser=browser,
        keyword=keyword,
    )
    console.print(f"\n[dim]Results written to {result_file}[/]")

    if report:
        _generate_reports(config)

    if not success:
        ctx.exit(1)


@main.command()
@click.pass_context
def report(ctx: click.Context) -> None:
    """Generate the HTML report and test-summary.json from result files."""
    config = ctx.obj["config"]
    try:
        _generate_reports(config)
    except OSError as e:
        console.print(f"[red]❌ Fatal error in report generation:[/] {escape(str(e))}")
        ctx.exit(1)


@main.command()
@click.pass_context
def categories(ctx: click.Context) -> None:
    """List the categories known to the suite."""
    config = ctx.obj["config"]

    table = Table(title="Product Categories")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Path", style="dim")
    table.add_column("Description", style="dim")

    for key, category in config.categories.items():
        table.add_row(key, category.name, category.path, category.description)

    console.print(table)


def _generate_reports(config) -> TestSummary | None:
    generator = ReportGenerator(config)
    summary = generator.generate()
    if summary is None:
        return None

    _show_summary(summary)
    console.print(f"[dim]Summary written to {config.report.summary_path}[/]\n")
    return summary


def _show_summary(summary: TestSummary) -> None:
    """Print scenario and step counts."""
    table = Table(title="📋 Test Summary")
    table.add_column("", style="bold")
    table.add_column("Total")
    table.add_column("Passed", style="green")
    table.add_column("Failed", style="red")
    table.add_column("Pass Rate")

    for label, counts in (("Scenarios", summary.scenarios), ("Steps", summary.steps)):
        table.add_row(label, str(counts.total), str(counts.passed), str(counts.failed), counts.pass_rate)

    console.print(table)

    if summary.status is RunStatus.PASSED:
        console.print("\n[bold green]Status: PASSED[/]")
    else:
        console.print("\n[bold red]Status: FAILED[/]")


if __name__ == "__main__":
    main()
