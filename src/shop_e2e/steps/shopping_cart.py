"""Step definitions for the shopping cart scenarios."""

import random

import pytest
from pytest_bdd import given, parsers, then, when

from ..config import SuiteConfig
from ..models import ScenarioState
from ..pages import BasePage, CartPage, CategoryPage, ProductPage


# ==================== FIXTURES ====================

@pytest.fixture
def scenario_state() -> ScenarioState:
    """Fresh state for every scenario."""
    return ScenarioState()


@pytest.fixture
def product_rng() -> random.Random:
    """Source of randomness for product selection."""
    return random.Random()


@pytest.fixture
def base_page(shop_page, suite_config: SuiteConfig) -> BasePage:
    return BasePage(shop_page, suite_config)


@pytest.fixture
def category_page(shop_page, suite_config: SuiteConfig, product_rng: random.Random) -> CategoryPage:
    return CategoryPage(shop_page, suite_config, rng=product_rng)


@pytest.fixture
def product_page(shop_page, suite_config: SuiteConfig) -> ProductPage:
    return ProductPage(shop_page, suite_config)


@pytest.fixture
def cart_page(shop_page, suite_config: SuiteConfig) -> CartPage:
    return CartPage(shop_page, suite_config)


# ==================== GIVEN STEPS ====================

@given("I am on the shop homepage")
def open_homepage(base_page: BasePage):
    base_page.log("Step: Navigate to the shop homepage")
    base_page.visit("/")
    base_page.handle_cookie_consent()
    base_page.verify_element_visible("body")


@given(parsers.parse('I navigate to the "{category}" product category'))
@when(parsers.parse('I navigate to the "{category}" product category'))
def navigate_to_category(category_page: CategoryPage, scenario_state: ScenarioState, category: str):
    category_page.log(f"Step: Navigate to category - {category}")
    scenario_state.current_category = category
    category_page.visit_category(category)


# ==================== WHEN STEPS ====================

@when("I select a random product from the category")
def select_random_product(category_page: CategoryPage, scenario_state: ScenarioState):
    scenario_state.selected_product_url = category_page.select_random_product()


@when(parsers.parse("I select product at index {index:d}"))
def select_product_at_index(category_page: CategoryPage, scenario_state: ScenarioState, index: int):
    scenario_state.selected_product_url = category_page.select_product_by_index(index)


@when("I add the product to my cart")
def add_product_to_cart(product_page: ProductPage, scenario_state: ScenarioState):
    product_page.wait_for_product_page_load()
    scenario_state.product = product_page.complete_add_to_cart_flow()
    scenario_state.products_added += 1
    product_page.log(f"Total products added: {scenario_state.products_added}")


@when("I navigate to the cart page")
def navigate_to_cart(cart_page: CartPage):
    cart_page.navigate_to_cart()


@when("I click on the cart icon")
def click_cart_icon(cart_page: CartPage):
    cart_page.click_cart_icon()


@when("I clear the cart")
def clear_cart(cart_page: CartPage, scenario_state: ScenarioState):
    if "/cart" not in cart_page.get_current_url():
        cart_page.navigate_to_cart()
    cart_page.clear_cart()
    scenario_state.products_added = 0


# ==================== THEN STEPS ====================

@then("the product should be visible in my cart")
def product_visible_in_cart(cart_page: CartPage, scenario_state: ScenarioState):
    if "/cart" not in cart_page.get_current_url():
        cart_page.navigate_to_cart()

    title = scenario_state.product.title if scenario_state.product else None
    cart_page.verify_product_in_cart_by_reference(title)
    cart_page.take_screenshot("cart-with-product")


@then(parsers.parse('the cart icon should display a count of "{count:d}"'))
def cart_badge_shows_count(cart_page: CartPage, count: int):
    cart_page.verify_cart_badge_count(count)


@then("the cart icon should display the updated count")
def cart_badge_shows_updated_count(cart_page: CartPage, scenario_state: ScenarioState):
    cart_page.verify_cart_badge_count(scenario_state.products_added)


@then(
    parsers.re(r"the cart should contain (?P<count>\d+) products?(?:\(s\))?"),
    converters={"count": int},
)
def cart_contains_products(cart_page: CartPage, count: int):
    cart_page.navigate_to_cart()
    cart_page.verify_cart_item_count(count)


@then("the cart should be empty")
def cart_is_empty(cart_page: CartPage):
    cart_page.verify_cart_item_count(0)


@then("I should see the cart page")
def see_cart_page(cart_page: CartPage):
    cart_page.verify_cart_page_layout()
