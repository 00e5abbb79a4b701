"""Cart page - badge, items and product verification."""

import re

from playwright.sync_api import Locator

from ..dom import visible_text
from ..selector_chain import SelectorChain
from .base_page import BasePage

# Characters of the title compared verbatim against the cart page text
TITLE_PREFIX_LENGTH = 20
MIN_KEYWORD_LENGTH = 4


class CartPage(BasePage):
    """Page object for the shopping cart."""

    CART_ICON = SelectorChain("cart icon", (
        'a[href*="/cart"]',
        '[class*="cart-icon"]',
        '[class*="CartIcon"]',
        '[data-testid="cart-icon"]',
        'a[aria-label*="cart"]',
        'button[aria-label*="cart"]',
    ))
    BADGE = SelectorChain("cart badge", (
        '[class*="cart"] [class*="badge"]',
        '[class*="cart"] [class*="count"]',
        '[class*="Cart"] [class*="Badge"]',
        'a[href*="/cart"] span',
        '[data-testid="cart-badge"]',
        '[class*="counter"]',
        '[aria-label*="items"]',
    ))
    ITEMS = SelectorChain("cart items", (
        '[class*="CartItem"]',
        '[class*="cart-item"]',
        'article[class*="item"]',
        '[data-testid="cart-item"]',
        'li[class*="item"]',
    ))
    ITEM_TITLE = ("h3", "h4", '[class*="title"]', "a")
    REMOVE = SelectorChain("remove item", (
        'button[aria-label*="remove"]',
        'button[aria-label*="Remove"]',
        ".remove",
        '[class*="remove"]',
        'button[title*="remove"]',
    ))
    TOTAL = SelectorChain("cart total", (
        '[class*="subtotal"]',
        '[class*="total"]',
        '[class*="price"]',
    ))

    def navigate_to_cart(self) -> None:
        self.log("Navigating to cart page...")
        self.visit(self.config.cart_path)
        self.wait_for_cart_page_load()

    def click_cart_icon(self) -> None:
        """Open the cart from the header, falling back to the cart URL."""
        self.log("Clicking cart icon in header...")
        if icon := self.CART_ICON.locate(self.page):
            icon.scroll_into_view_if_needed()
            icon.click(force=True)
            self.pause(self.config.pacing.settle)
            self.wait_for_page_load()
        else:
            self.warn("Cart icon not found, navigating directly to cart URL")
            self.navigate_to_cart()

    def wait_for_cart_page_load(self) -> None:
        self.verify_cart_page_layout()
        self.pause(self.config.pacing.settle)

    def verify_cart_page_layout(self) -> None:
        assert "/cart" in self.page.url, f"Not on the cart page: {self.page.url}"
        assert self.element_exists("body"), "Cart page has no body"

    # ---- badge --------------------------------------------------------

    def get_cart_badge_count(self) -> int:
        """Number shown in the header badge; 0 when there is no badge."""
        badge = self.BADGE.locate(self.page)
        if badge is None:
            self.log("Cart badge not found, returning 0")
            return 0

        text = badge.inner_text().strip()
        match = re.search(r"\d+", text)
        if match is None:
            self.warn(f"Cart badge text {text!r} holds no number")
            return 0

        count = int(match.group())
        self.log(f"Cart badge count: {count}")
        return count

    def verify_cart_badge_count(self, expected: int) -> None:
        """Compare the badge with ``expected``; a missing badge is only logged."""
        if self.first_matching(self.BADGE) is None:
            self.warn("Cart badge not found, skipping count check")
            return
        actual = self.get_cart_badge_count()
        assert actual == expected, f"Cart badge shows {actual}, expected {expected}"

    def verify_cart_badge_visible(self) -> bool:
        for selector in self.BADGE:
            locator = self.page.locator(selector)
            if locator.count() and locator.first.is_visible():
                self.log("Cart badge is visible")
                return True
        self.warn("Cart badge not found with standard selectors")
        return False

    # ---- items --------------------------------------------------------

    def get_cart_items(self) -> list[Locator]:
        """Cart line items; empty when no item selector matches."""
        selector = self.first_matching(self.ITEMS)
        if selector is None:
            self.log("No cart items found")
            return []
        items = self.page.locator(selector).all()
        self.log(f"Found {len(items)} cart items using selector: {selector}")
        return items

    def get_cart_item_count(self) -> int:
        count = len(self.get_cart_items())
        self.log(f"Cart contains {count} items")
        return count

    def verify_cart_not_empty(self) -> None:
        assert self.get_cart_item_count() > 0, "Cart is empty"

    def verify_cart_item_count(self, expected: int) -> None:
        actual = self.get_cart_item_count()
        assert actual == expected, f"Cart contains {actual} items, expected {expected}"

    def get_product_titles_in_cart(self) -> list[str]:
        titles = []
        for item in self.get_cart_items():
            for selector in self.ITEM_TITLE:
                title = item.locator(selector)
                if title.count():
                    titles.append(title.first.inner_text().strip())
                    break
        self.log(f"Product titles in cart: {', '.join(titles)}")
        return titles

    def page_text(self) -> str:
        return visible_text(self.page.content()).lower()

    def verify_product_in_cart(self, product_title: str) -> None:
        """Match the title prefix, then single keywords, against the page text."""
        self.log(f'Verifying product "{product_title}" is in cart...')
        title = product_title.lower().strip()
        body_text = self.page_text()

        prefix = title[:TITLE_PREFIX_LENGTH]
        if prefix and prefix in body_text:
            self.log("Product found in cart")
            return

        self.warn("Exact product title not found, checking for partial match")
        keywords = [word for word in title.split() if len(word) >= MIN_KEYWORD_LENGTH]
        for keyword in keywords:
            if keyword in body_text:
                self.log(f'Found keyword "{keyword}" in cart')
                return

        raise AssertionError(f'Product "{product_title}" not found in cart')

    def verify_product_in_cart_by_reference(self, product_title: str | None) -> None:
        """Cart is not empty and, when a title was captured, contains it."""
        self.verify_cart_not_empty()
        if product_title:
            self.verify_product_in_cart(product_title)

    def clear_cart(self) -> int:
        """Click every remove button once; returns the number of clicks."""
        self.log("Clearing cart...")
        if not self.get_cart_items():
            self.log("Cart is already empty")
            return 0

        selector = self.first_matching(self.REMOVE)
        if selector is None:
            self.warn("No remove buttons found")
            return 0

        clicked = 0
        # The list re-renders after each removal, so the button is looked up again
        for _ in range(self.page.locator(selector).count()):
            button = self.page.locator(selector).first
            if button.count() == 0:
                break
            try:
                button.click(force=True, timeout=self.config.timeouts.element)
            except Exception as e:
                self.warn(f"Remove button {selector} not clickable: {e}")
                continue
            clicked += 1
            self.pause(self.config.pacing.modal)
        return clicked

    def get_cart_summary(self) -> dict:
        summary = {
            "item_count": self.get_cart_item_count(),
            "total": "N/A",
        }
        if total := self.TOTAL.locate(self.page):
            summary["total"] = total.inner_text().strip()
        self.log(f"Cart summary: {summary}")
        return summary

    def take_cart_screenshot(self):
        return self.take_screenshot("cart-page")
