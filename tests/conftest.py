"""Shared fixtures for the unit and scenario tests."""

import random

import pytest

from fake_shop import BASE_URL, FakePage, FakeSite, build_shop
from shop_e2e.config import ArtifactsConfig, ReportConfig, SuiteConfig, TimeoutConfig


@pytest.fixture
def suite_config(tmp_path) -> SuiteConfig:
    """Config pointed at the fake shop, with all artifacts under tmp_path."""
    return SuiteConfig(
        base_url=BASE_URL,
        timeouts=TimeoutConfig(page_load=1000, command=200, element=200),
        artifacts=ArtifactsConfig(
            screenshot_dir=tmp_path / "screenshots",
            snapshot_dir=tmp_path / "snapshots",
        ),
        report=ReportConfig(
            output_dir=tmp_path / "reports",
            json_dir=tmp_path / "reports" / "cucumber-json",
            html_dir=tmp_path / "reports" / "html",
        ),
    )


@pytest.fixture
def shop_site() -> FakeSite:
    return build_shop()


@pytest.fixture
def page(shop_site) -> FakePage:
    """Replaces the browser page from pytest-playwright."""
    return FakePage(shop_site)


@pytest.fixture
def product_rng() -> random.Random:
    return random.Random(7)
