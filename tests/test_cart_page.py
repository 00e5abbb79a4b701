"""Tests for the cart page object."""

import pytest

from fake_shop import FakePage, FakeSite
from shop_e2e.pages import CartPage


@pytest.fixture
def cart_page(page, suite_config):
    return CartPage(page, suite_config)


@pytest.fixture
def filled_cart(cart_page, shop_site):
    shop_site.cart.extend(["Sofa Velvet Grau", "Stehleuchte Messing"])
    cart_page.navigate_to_cart()
    return cart_page


def text_page(suite_config, text: str) -> CartPage:
    return CartPage(FakePage(html=f"<html><body><main><p>{text}</p></main></body></html>"), suite_config)


class TestNavigation:
    """Tests for reaching the cart."""

    def test_navigate_to_cart(self, cart_page, page):
        cart_page.navigate_to_cart()

        assert page.visited == ["/cart/index/"]
        cart_page.verify_cart_page_layout()

    def test_click_cart_icon_follows_link(self, cart_page, page):
        page.goto("https://shop.test/moebel/")

        cart_page.click_cart_icon()

        assert page.clicks == ['a[href*="/cart"]']
        assert page.path == "/cart/index/"

    def test_click_cart_icon_falls_back_to_url(self, suite_config):
        site = FakeSite({"/cart/index/": "<html><body><h1>Warenkorb</h1></body></html>"})
        page = FakePage(site, html="<html><body><h1>Ohne Header</h1></body></html>")

        CartPage(page, suite_config).click_cart_icon()

        assert page.visited == ["/cart/index/"]

    def test_layout_check_fails_elsewhere(self, cart_page, page):
        page.goto("https://shop.test/moebel/")

        with pytest.raises(AssertionError, match="Not on the cart page"):
            cart_page.verify_cart_page_layout()


class TestBadge:
    """Tests for the header cart badge."""

    def test_badge_count(self, filled_cart):
        assert filled_cart.get_cart_badge_count() == 2
        filled_cart.verify_cart_badge_count(2)
        assert filled_cart.verify_cart_badge_visible()

    def test_wrong_badge_count_fails(self, filled_cart):
        with pytest.raises(AssertionError, match="Cart badge shows 2, expected 3"):
            filled_cart.verify_cart_badge_count(3)

    def test_missing_badge_reads_zero(self, suite_config):
        cart = text_page(suite_config, "Kein Header hier")

        assert cart.get_cart_badge_count() == 0
        assert cart.verify_cart_badge_visible() is False

    def test_missing_badge_skips_count_check(self, suite_config):
        text_page(suite_config, "Kein Header hier").verify_cart_badge_count(5)

    def test_badge_without_number_reads_zero(self, suite_config):
        page = FakePage(html='<body><div class="cart"><span class="badge">leer</span></div></body>')

        assert CartPage(page, suite_config).get_cart_badge_count() == 0


class TestItems:
    """Tests for the cart line items."""

    def test_item_count_and_titles(self, filled_cart):
        assert filled_cart.get_cart_item_count() == 2
        assert filled_cart.get_product_titles_in_cart() == ["Sofa Velvet Grau", "Stehleuchte Messing"]
        filled_cart.verify_cart_not_empty()

    def test_empty_cart(self, cart_page):
        cart_page.navigate_to_cart()

        assert cart_page.get_cart_items() == []
        cart_page.verify_cart_item_count(0)
        with pytest.raises(AssertionError, match="Cart is empty"):
            cart_page.verify_cart_not_empty()

    def test_cart_summary(self, filled_cart):
        assert filled_cart.get_cart_summary() == {"item_count": 2, "total": "2 Artikel"}


class TestVerifyProductInCart:
    """Tests for matching a product title against the cart page text."""

    def test_exact_title(self, suite_config):
        text_page(suite_config, "Elegant Wooden Table - 1 Stück").verify_product_in_cart("Elegant Wooden Table")

    def test_keyword_match(self, suite_config):
        text_page(suite_config, "Your cart: one wooden item").verify_product_in_cart("Elegant Wooden Table")

    def test_other_keyword_match(self, suite_config):
        text_page(suite_config, "Side table in oak").verify_product_in_cart("Elegant Wooden Table")

    def test_short_words_are_not_keywords(self, suite_config):
        cart = text_page(suite_config, "a set of two")

        with pytest.raises(AssertionError, match="not found in cart"):
            cart.verify_product_in_cart("Set of Two Elegant Chairs")

    def test_no_match_fails(self, suite_config):
        with pytest.raises(AssertionError, match="Elegant Wooden Table"):
            text_page(suite_config, "Sofa in Grau").verify_product_in_cart("Elegant Wooden Table")

    def test_prefix_of_long_title(self, suite_config):
        cart = text_page(suite_config, "Stehleuchte Messing-G...")

        cart.verify_product_in_cart("Stehleuchte Messing-Gold mit Marmorfuss")

    def test_by_reference_requires_items(self, cart_page):
        cart_page.navigate_to_cart()

        with pytest.raises(AssertionError, match="Cart is empty"):
            cart_page.verify_product_in_cart_by_reference("Sofa Velvet Grau")

    def test_by_reference_without_title(self, filled_cart):
        filled_cart.verify_product_in_cart_by_reference(None)
        filled_cart.verify_product_in_cart_by_reference("Stehleuchte Messing")


class TestClearCart:
    """Tests for emptying the cart."""

    def test_clear_cart_removes_every_item(self, filled_cart, shop_site):
        assert filled_cart.clear_cart() == 2

        assert shop_site.cart == []
        filled_cart.verify_cart_item_count(0)

    def test_handles_go_stale_when_the_list_rerenders(self, filled_cart):
        handles = filled_cart.page.locator('button[aria-label*="remove"]').element_handles()
        handles[0].click()

        with pytest.raises(RuntimeError, match="not attached"):
            handles[1].click()

    def test_clear_cart_survives_rerender_after_each_removal(self, cart_page, shop_site):
        shop_site.cart.extend(["Sofa Velvet Grau", "Vase Keramik Sand", "Pendelleuchte Glas"])
        cart_page.navigate_to_cart()

        assert cart_page.clear_cart() == 3

        assert shop_site.cart == []
        assert cart_page.page.clicks == ['button[aria-label*="remove"]'] * 3

    def test_unclickable_remove_button_is_skipped(self, suite_config):
        html = (
            '<body><ul><li class="cart-item"><h3>Sofa</h3>'
            '<button aria-label="remove item" data-action="broken">x</button></li></ul></body>'
        )
        cart = CartPage(FakePage(html=html), suite_config)

        assert cart.clear_cart() == 0

    def test_clear_empty_cart(self, cart_page):
        cart_page.navigate_to_cart()

        assert cart_page.clear_cart() == 0

    def test_screenshot(self, filled_cart, suite_config):
        path = filled_cart.take_cart_screenshot()

        assert path.parent == suite_config.artifacts.screenshot_dir
        assert path.name.startswith("cart-page_")
