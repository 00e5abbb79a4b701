"""Read Cucumber JSON result files and fold them into counts."""

import json
from datetime import datetime
from pathlib import Path

from ..models import CountSummary, FeatureResult, ScenarioResult, StepStatus, TestSummary


def find_result_files(json_dir: Path) -> list[Path]:
    """Result files in name order; empty when the directory is missing."""
    if not json_dir.is_dir():
        return []
    return sorted(p for p in json_dir.glob("*.json") if p.is_file())


def load_results(files: list[Path]) -> list[dict]:
    """All feature objects from every result file, in file order."""
    features: list[dict] = []
    for path in files:
        with open(path, encoding="utf-8") as f:
            content = json.load(f)
        if isinstance(content, list):
            features.extend(content)
    return features


def _step_status(step: dict) -> str:
    return (step.get("result") or {}).get("status", "")


def parse_features(features: list[dict]) -> list[FeatureResult]:
    """Turn raw feature objects into per-scenario results."""
    results = []
    for feature in features:
        feature_result = FeatureResult(
            name=feature.get("name", ""),
            uri=feature.get("uri", ""),
        )
        for scenario in feature.get("elements", []):
            steps = scenario.get("steps", [])
            statuses = [_step_status(step) for step in steps]
            # pytest-bdd reports durations in nanoseconds
            duration_ns = sum((step.get("result") or {}).get("duration", 0) or 0 for step in steps)
            error = next(
                (
                    (step.get("result") or {}).get("error_message")
                    for step in steps
                    if _step_status(step) == StepStatus.FAILED.value
                ),
                None,
            )
            feature_result.scenarios.append(ScenarioResult(
                feature=feature_result.name,
                name=scenario.get("name", ""),
                steps_total=len(steps),
                steps_passed=statuses.count(StepStatus.PASSED.value),
                steps_failed=statuses.count(StepStatus.FAILED.value),
                duration_ms=duration_ns / 1_000_000,
                error_message=error,
            ))
        results.append(feature_result)
    return results


def report_timestamp(now: datetime | None = None) -> dict[str, str]:
    """ISO timestamp plus human readable date and time."""
    now = now or datetime.now()
    return {
        "timestamp": now.isoformat(),
        "date": now.strftime("%B %d, %Y"),
        "time": now.strftime("%I:%M:%S %p"),
    }


def summarize(
    features: list[FeatureResult],
    project: str,
    test_type: str,
    framework: str,
    now: datetime | None = None,
) -> TestSummary:
    """Scenario and step counts over every feature.

    A scenario passes unless one of its steps failed; skipped or undefined
    steps do not fail it.
    """
    scenarios = CountSummary()
    steps = CountSummary()

    for feature in features:
        for scenario in feature.scenarios:
            scenarios.total += 1
            if scenario.passed:
                scenarios.passed += 1
            else:
                scenarios.failed += 1

            steps.total += scenario.steps_total
            steps.passed += scenario.steps_passed
            steps.failed += scenario.steps_failed

    return TestSummary(
        project=project,
        test_type=test_type,
        framework=framework,
        scenarios=scenarios,
        steps=steps,
        **report_timestamp(now),
    )
