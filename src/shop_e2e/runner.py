"""Run the browser features through pytest and collect a result file."""

import os
import shlex
import subprocess
from datetime import datetime
from pathlib import Path

from .config import SuiteConfig


class SuiteRunner:
    """Run feature files with the configured test command."""

    def __init__(self, config: SuiteConfig, config_path: Path | None = None):
        self.config = config
        self.config_path = config_path

    def result_file(self, now: datetime | None = None) -> Path:
        """Fresh Cucumber JSON path inside the result directory."""
        now = now or datetime.now()
        return self.config.report.json_dir / f"cucumber-report-{now.strftime('%Y%m%d_%H%M%S')}.json"

    def build_command(
        self,
        result_file: Path,
        feature: Path | None = None,
        headed: bool = False,
        browser: str | None = None,
        keyword: str | None = None,
    ) -> list[str]:
        # Plugins are registered by the project conftest, after pytest-playwright
        cmd = shlex.split(self.config.test_command)
        cmd.append(str(feature or self.config.features_path))
        cmd.append(f"--cucumberjson={result_file}")
        cmd += ["--browser", browser or self.config.report.browser]

        if headed:
            cmd.append("--headed")
        if keyword:
            cmd += ["-k", keyword]
        if self.config_path:
            cmd += ["--shop-config", str(self.config_path)]
        if "-v" not in cmd:
            cmd.append("-v")
        return cmd

    def run(
        self,
        feature: Path | None = None,
        headed: bool = False,
        browser: str | None = None,
        keyword: str | None = None,
    ) -> tuple[bool, Path]:
        """Run the suite; returns success and the result file path."""
        result_file = self.result_file()
        result_file.parent.mkdir(parents=True, exist_ok=True)

        cmd = self.build_command(result_file, feature, headed, browser, keyword)
        result = subprocess.run(
            cmd,
            cwd=Path.cwd(),
            env={**os.environ, "PYTHONPATH": f"{os.getcwd()}:{os.environ.get('PYTHONPATH', '')}"},
        )
        return result.returncode == 0, result_file
