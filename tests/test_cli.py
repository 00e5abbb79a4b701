"""Tests for the command line interface and the suite runner."""

import json
import shlex
from datetime import datetime
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from shop_e2e.cli import main
from shop_e2e.runner import SuiteRunner


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "shop_e2e.yaml"
    reports = tmp_path / "reports"
    path.write_text(yaml.safe_dump({"shop_e2e": {
        "base_url": "https://shop.test",
        "report": {
            "output_dir": str(reports),
            "json_dir": str(reports / "cucumber-json"),
            "html_dir": str(reports / "html"),
        },
    }}))
    return path


@pytest.fixture
def cli():
    return CliRunner()


def write_results(config_file: Path, status: str = "passed") -> None:
    json_dir = config_file.parent / "reports" / "cucumber-json"
    json_dir.mkdir(parents=True, exist_ok=True)
    results = [{
        "name": "Shopping cart",
        "uri": "features/shopping_cart.feature",
        "elements": [{"name": "Add a product", "steps": [{"name": "s", "result": {"status": status}}]}],
    }]
    (json_dir / "cucumber-report-1.json").write_text(json.dumps(results))


class TestCategoriesCommand:
    """Tests for listing categories."""

    def test_lists_registry(self, cli, config_file):
        result = cli.invoke(main, ["--config", str(config_file), "categories"])

        assert result.exit_code == 0
        assert "moebel" in result.output
        assert "/leuchten/" in result.output


class TestReportCommand:
    """Tests for report generation from the command line."""

    def test_without_results(self, cli, config_file):
        result = cli.invoke(main, ["--config", str(config_file), "report"])

        assert result.exit_code == 0
        assert "No Cucumber JSON reports found" in result.output

    def test_with_results(self, cli, config_file):
        write_results(config_file)

        result = cli.invoke(main, ["--config", str(config_file), "report"])

        assert result.exit_code == 0
        assert "Status: PASSED" in result.output
        summary = json.loads((config_file.parent / "reports" / "test-summary.json").read_text())
        assert summary["scenarios"]["total"] == 1

    def test_failed_run_reported(self, cli, config_file):
        write_results(config_file, status="failed")

        result = cli.invoke(main, ["--config", str(config_file), "report"])

        assert result.exit_code == 0
        assert "Status: FAILED" in result.output

    def test_write_error_exits_non_zero(self, cli, config_file):
        write_results(config_file)
        (config_file.parent / "reports" / "test-summary.json").mkdir(parents=True)

        result = cli.invoke(main, ["--config", str(config_file), "report"])

        assert result.exit_code == 1
        assert "Fatal error in report generation" in result.output


class TestRunCommand:
    """Tests for running the suite from the command line."""

    def test_failing_run_exits_non_zero(self, cli, config_file, monkeypatch):
        calls = []

        def fake_run(self, feature=None, headed=False, browser=None, keyword=None):
            calls.append((feature, headed, browser, keyword))
            return False, Path("reports/cucumber-json/cucumber-report-x.json")

        monkeypatch.setattr(SuiteRunner, "run", fake_run)

        result = cli.invoke(main, ["--config", str(config_file), "run", "--headed", "-b", "firefox", "--no-report"])

        assert result.exit_code == 1
        assert calls == [(None, True, "firefox", None)]

    def test_passing_run_generates_reports(self, cli, config_file, monkeypatch):
        monkeypatch.setattr(SuiteRunner, "run", lambda self, *a, **kw: (True, Path("r.json")))
        write_results(config_file)

        result = cli.invoke(main, ["--config", str(config_file), "run", "-k", "moebel"])

        assert result.exit_code == 0
        assert "Status: PASSED" in result.output


class TestSuiteRunner:
    """Tests for the pytest command line built by the runner."""

    def test_default_command(self, suite_config):
        runner = SuiteRunner(suite_config)
        result_file = Path("reports/cucumber-json/r.json")

        cmd = runner.build_command(result_file)

        assert cmd == [
            "pytest",
            "features",
            "--cucumberjson=reports/cucumber-json/r.json",
            "--browser",
            "chromium",
            "-v",
        ]

    def test_options(self, suite_config):
        suite_config.test_command = "python -m pytest -v"
        runner = SuiteRunner(suite_config, Path("shop.yaml"))

        cmd = runner.build_command(Path("r.json"), Path("features/cart.feature"), headed=True, browser="webkit", keyword="moebel")

        assert cmd[:4] == shlex.split("python -m pytest -v")
        assert "features/cart.feature" in cmd
        assert cmd[cmd.index("--browser") + 1] == "webkit"
        assert "--headed" in cmd
        assert cmd[cmd.index("-k") + 1] == "moebel"
        assert cmd[cmd.index("--shop-config") + 1] == "shop.yaml"
        assert cmd.count("-v") == 1

    def test_result_file_is_timestamped(self, suite_config):
        path = SuiteRunner(suite_config).result_file(datetime(2025, 1, 2, 3, 4, 5))

        assert path == suite_config.report.json_dir / "cucumber-report-20250102_030405.json"
