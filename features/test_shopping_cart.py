"""Shopping cart scenarios against the live shop."""

import pytest
from pytest_bdd import scenarios

pytestmark = pytest.mark.e2e

scenarios("shopping_cart.feature")
