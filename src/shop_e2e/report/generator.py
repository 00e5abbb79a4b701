"""Report generator - HTML report and JSON summary from result files."""

import json
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, TemplateError
from rich.console import Console
from rich.markup import escape

from ..config import SuiteConfig
from ..models import FeatureResult, TestSummary
from .summary import find_result_files, load_results, parse_features, summarize
from .templates import HTML_REPORT_TEMPLATE

console = Console()


class ReportGenerator:
    """Fold Cucumber JSON result files into an HTML report and a summary."""

    def __init__(self, config: SuiteConfig):
        self.config = config
        self.report = config.report
        self._env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

    def ensure_directories(self) -> None:
        for directory in (self.report.output_dir, self.report.json_dir, self.report.html_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def collect(self) -> list[FeatureResult] | None:
        """Parsed results, or None when there is nothing to report on."""
        files = find_result_files(self.report.json_dir)
        if not files:
            console.print(f"[red]❌ Error: No Cucumber JSON reports found in:[/] {self.report.json_dir}")
            console.print("[dim]Make sure tests have been executed first.[/]")
            return None
        return parse_features(load_results(files))

    def build_summary(self, features: list[FeatureResult], now: datetime | None = None) -> TestSummary:
        return summarize(
            features,
            project=self.report.project,
            test_type=self.report.test_type,
            framework=self.report.framework,
            now=now,
        )

    def custom_data(self, summary: TestSummary) -> list[tuple[str, str]]:
        categories = ", ".join(c.name for c in self.config.categories.values())
        return [
            ("Project", self.report.project),
            ("Test Type", summary.test_type),
            ("Framework", summary.framework),
            ("Execution Date", summary.date),
            ("Execution Time", summary.time),
            ("Test Environment", self.config.base_url),
            ("Categories Tested", categories),
        ]

    def render_html(self, features: list[FeatureResult], summary: TestSummary) -> str:
        template = self._env.from_string(HTML_REPORT_TEMPLATE)
        return template.render(
            page_title=self.report.page_title,
            report_name=self.report.report_name,
            project=self.report.project,
            browser=self.report.browser,
            device=self.report.device,
            summary=summary.to_dict(),
            custom_title="Test Execution Information",
            custom_data=self.custom_data(summary),
            features=features,
        )

    def generate_html_report(self, features: list[FeatureResult], summary: TestSummary) -> Path | None:
        """Write ``index.html``; rendering problems are reported, not raised."""
        console.print("\n[bold]Generating HTML report...[/]")
        path = self.report.html_dir / "index.html"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.render_html(features, summary), encoding="utf-8")
        except (TemplateError, OSError) as e:
            console.print(f"[red]❌ Error generating report:[/] {escape(str(e))}")
            return None

        console.print("[green]✅ HTML report generated successfully![/]")
        console.print(f"📊 Report location: {path}")
        return path

    def generate_summary_json(self, summary: TestSummary) -> Path:
        """Write ``test-summary.json``; file-system errors propagate."""
        path = self.report.summary_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(summary.to_dict(), f, indent=2, ensure_ascii=False)
        return path

    def generate(self, now: datetime | None = None) -> TestSummary | None:
        """Produce every report; returns the summary, or None without results."""
        self.ensure_directories()

        features = self.collect()
        if features is None:
            return None

        summary = self.build_summary(features, now)
        self.generate_html_report(features, summary)
        self.generate_summary_json(summary)
        return summary
