"""Configuration management for Shop E2E."""

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at import time
load_dotenv()


class ViewportConfig(BaseModel):
    """Browser viewport size."""

    width: int = 1920
    height: int = 1080


class TimeoutConfig(BaseModel):
    """Timeouts in milliseconds."""

    page_load: int = 300_000
    command: int = 60_000
    element: int = 10_000


class BrowserConfig(BaseModel):
    """Browser launch configuration."""

    launch_args: list[str] = Field(default_factory=lambda: [
        "--disable-blink-features=AutomationControlled",
        "--no-sandbox",
        "--disable-web-security",
    ])
    # Default Chromium flags that advertise automation
    ignore_default_args: list[str] = Field(default_factory=lambda: ["--enable-automation"])
    bypass_csp: bool = True


class PacingConfig(BaseModel):
    """Fixed pauses that simulate a human pace, in milliseconds.

    Every pause is multiplied by ``factor``; set it to 0 for a fast run.
    """

    factor: float = 1.0
    settle: int = 2000
    page_load: int = 1000
    before_click: int = 500
    hover: int = 200
    after_click: int = 500
    after_clear: int = 300
    keystroke_delay: int = 100
    cookie_banner: int = 2000
    cookie_before_click: int = 500
    cookie_after_click: int = 1500
    category_render: int = 8000
    lazy_load: int = 3000
    product_load: int = 2000
    add_to_cart_settle: int = 3000
    modal: int = 1000


class CategoryConfig(BaseModel):
    """A product category known to the suite."""

    path: str
    name: str
    description: str = ""


def _default_categories() -> dict[str, CategoryConfig]:
    return {
        "moebel": CategoryConfig(path="/moebel/", name="Möbel", description="Furniture category"),
        "wohnaccessoires": CategoryConfig(
            path="/wohnaccessoires/", name="Wohnaccessoires", description="Home accessories category"
        ),
        "leuchten": CategoryConfig(path="/leuchten/", name="Leuchten", description="Lighting category"),
    }


class ArtifactsConfig(BaseModel):
    """Where failure artifacts are written."""

    screenshot_dir: Path = Path("reports/screenshots")
    snapshot_dir: Path = Path("reports/snapshots")


class ReportConfig(BaseModel):
    """Report generation configuration."""

    output_dir: Path = Path("reports")
    json_dir: Path = Path("reports/cucumber-json")
    html_dir: Path = Path("reports/html")
    summary_file: str = "test-summary.json"
    project: str = "Westwing Now E2E Tests"
    report_name: str = "Westwing Automation Test Report"
    page_title: str = "Westwing Now - E2E Test Results"
    test_type: str = "End-to-End"
    framework: str = "Playwright + pytest-bdd"
    browser: str = "chromium"
    device: str = "Desktop"

    @property
    def summary_path(self) -> Path:
        return self.output_dir / self.summary_file


class SuiteConfig(BaseSettings):
    """Main configuration for the E2E suite."""

    model_config = SettingsConfigDict(
        env_prefix="SHOP_E2E_",
        env_nested_delimiter="__",
    )

    # Core settings
    base_url: str = "https://www.westwing.de"
    accept_language: str = "de-DE,de;q=0.9,en-US;q=0.8,en;q=0.7"
    locale: str = "de-DE"
    cart_path: str = "/cart/index/"
    test_command: str = "pytest"
    features_path: Path = Path("features")

    # Sub-configurations
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    pacing: PacingConfig = Field(default_factory=PacingConfig)
    categories: dict[str, CategoryConfig] = Field(default_factory=_default_categories)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment variables win over values passed in from YAML
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def category_path(self, key: str) -> str:
        """Path of a registered category, or ``/<key>/`` for unknown keys."""
        if category := self.categories.get(key):
            return category.path
        return f"/{key.strip('/')}/"


def load_config(config_path: Path | None = None) -> SuiteConfig:
    """Load configuration from YAML file and environment variables."""
    config_data: dict = {}

    # Try to find config file
    if config_path is None:
        for name in ["shop_e2e.yaml", "shop_e2e.yml", ".shop_e2e.yaml"]:
            if Path(name).exists():
                config_path = Path(name)
                break

    # Load from YAML if exists
    if config_path and config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if raw and "shop_e2e" in raw:
                config_data = raw["shop_e2e"]
            elif raw:
                config_data = raw

    # Environment variables override YAML
    return SuiteConfig(**config_data)
