"""Project-wide pytest configuration."""

# Registered here so the fixture overrides load after pytest-playwright
pytest_plugins = [
    "shop_e2e.plugins.browser",
    "shop_e2e.plugins.capture",
    "shop_e2e.steps.shopping_cart",
]
