"""Shop E2E - BDD browser tests for an online shop's cart flow."""

__version__ = "0.1.0"
