"""Core data models for Shop E2E."""

from dataclasses import asdict, dataclass, field
from enum import Enum


class StepStatus(Enum):
    """Step result statuses found in Cucumber JSON result files."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    UNDEFINED = "undefined"


class RunStatus(Enum):
    """Overall status of a test run."""

    PASSED = "PASSED"
    FAILED = "FAILED"


@dataclass
class SelectedProduct:
    """Product captured on the product page for later cart checks."""

    url: str
    title: str | None = None
    price: str | None = None


@dataclass
class ScenarioState:
    """State shared between the steps of a single scenario."""

    products_added: int = 0
    current_category: str | None = None
    selected_product_url: str | None = None
    product: SelectedProduct | None = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class CountSummary:
    """Pass/fail counts for scenarios or steps."""

    total: int = 0
    passed: int = 0
    failed: int = 0

    @property
    def pass_rate(self) -> str:
        """Pass rate as a percentage string, e.g. ``66.67%``."""
        if self.total == 0:
            return "0%"
        return f"{self.passed / self.total * 100:.2f}%"

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "passRate": self.pass_rate,
        }


@dataclass
class TestSummary:
    """Summary of a test run, written to ``test-summary.json``."""

    __test__ = False  # not a pytest test class

    project: str
    timestamp: str
    date: str
    time: str
    test_type: str
    framework: str
    scenarios: CountSummary = field(default_factory=CountSummary)
    steps: CountSummary = field(default_factory=CountSummary)

    @property
    def status(self) -> RunStatus:
        return RunStatus.PASSED if self.scenarios.failed == 0 else RunStatus.FAILED

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "timestamp": self.timestamp,
            "date": self.date,
            "time": self.time,
            "testType": self.test_type,
            "framework": self.framework,
            "scenarios": self.scenarios.to_dict(),
            "steps": self.steps.to_dict(),
            "status": self.status.value,
        }


@dataclass
class ScenarioResult:
    """One scenario read from a result file."""

    feature: str
    name: str
    steps_total: int
    steps_passed: int
    steps_failed: int
    duration_ms: float = 0.0
    error_message: str | None = None

    @property
    def passed(self) -> bool:
        return self.steps_failed == 0


@dataclass
class FeatureResult:
    """One feature read from a result file, with its scenarios."""

    name: str
    uri: str
    scenarios: list[ScenarioResult] = field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for s in self.scenarios if s.passed)

    @property
    def failed_count(self) -> int:
        return len(self.scenarios) - self.passed_count
