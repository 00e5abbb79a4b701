"""Product detail page - product info and add-to-cart."""

from ..models import SelectedProduct
from ..selector_chain import SelectorChain
from .base_page import BasePage

PRICE_NOT_FOUND = "Price not found"


class ProductPage(BasePage):
    """Page object for an individual product page."""

    MAIN_CONTENT = SelectorChain("product content", (
        "h1",
        '[class*="ProductDetail"]',
        '[class*="product-title"]',
        "main",
    ))
    TITLE = SelectorChain("product title", (
        "h1",
        '[class*="ProductDetail"] h1',
        '[class*="product-title"]',
        'h1[class*="title"]',
    ))
    PRICE = SelectorChain("product price", (
        '[class*="price"]',
        '[data-testid*="price"]',
        'span:has-text("€")',
        'div:has-text("€")',
    ))
    ADD_TO_CART = SelectorChain("add to cart", (
        'button:has-text("In den Warenkorb")',
        'button:has-text("Warenkorb")',
        'button:has-text("Add to cart")',
        'button[class*="add-to-cart"]',
        'button[class*="AddToCart"]',
        '[data-testid="add-to-cart"]',
        'button[type="submit"]',
    ))
    MODAL = SelectorChain("modal", (
        ".modal",
        '[class*="Modal"]',
        '[role="dialog"]',
        '[class*="overlay"]',
    ))
    CLOSE_MODAL = SelectorChain("close modal", (
        'button[aria-label*="close"]',
        'button[aria-label*="Close"]',
        ".close",
        '[class*="close"]',
        'button:has-text("×")',
    ))
    SUCCESS = SelectorChain("added to cart", (
        ".success",
        '[class*="success"]',
        '[class*="Success"]',
        'div:has-text("erfolgreich")',
        'div:has-text("hinzugefügt")',
        'div:has-text("added")',
    ))
    VARIANTS = {
        "size": SelectorChain("size", (
            'select[name="size"]',
            '[data-testid="size-selector"]',
            'button:has-text("Größe")',
        )),
        "color": SelectorChain("color", (
            '[data-testid="color-option"]',
            'button[aria-label*="color"]',
            '[class*="color-swatch"]',
        )),
    }

    def wait_for_product_page_load(self) -> None:
        pacing = self.config.pacing
        self.pause(pacing.product_load)

        if selector := self.first_matching(self.MAIN_CONTENT):
            self.page.locator(selector).first.wait_for(
                state="visible", timeout=self.config.timeouts.command
            )
        self.pause(pacing.product_load)

    def verify_product_page_loaded(self) -> None:
        self.pause(self.config.pacing.page_load)
        self.verify_element_visible("body")

    def get_product_title(self) -> str:
        """Title of the product, or the document title as a fallback."""
        if locator := self.TITLE.locate(self.page):
            return locator.inner_text().strip()
        return self.page.title().strip()

    def get_product_price(self) -> str:
        if locator := self.PRICE.locate(self.page):
            return locator.inner_text().strip()
        self.warn("Product price not found")
        return PRICE_NOT_FOUND

    def get_product_url(self) -> str:
        return self.page.url

    def store_product_info(self) -> SelectedProduct:
        """Capture title, URL and price for checks on the cart page."""
        self.pause(self.config.pacing.hover)
        product = SelectedProduct(
            url=self.get_product_url(),
            title=self.get_product_title(),
            price=self.get_product_price(),
        )
        self.log(f"Product: {product.title} ({product.price})")
        return product

    def add_to_cart(self) -> bool:
        """Click the add-to-cart control; returns False if none was found."""
        pacing = self.config.pacing
        self.pause(pacing.before_click)

        selector = self.first_matching(self.ADD_TO_CART)
        if selector is None:
            self.warn("Could not find add to cart button")
            return False

        self.log(f"Found button with selector: {selector}")
        button = self.page.locator(selector).first
        button.scroll_into_view_if_needed()
        self.pause(pacing.settle)
        button.hover(force=True)
        self.pause(pacing.hover)
        button.click(force=True)
        self.pause(pacing.add_to_cart_settle)
        return True

    def _visible_modal(self) -> str | None:
        for selector in self.MODAL:
            locator = self.page.locator(selector)
            if locator.count() and locator.first.is_visible():
                return selector
        return None

    def handle_add_to_cart_modal(self) -> bool:
        """Close a confirmation modal if one is showing; returns True if one was."""
        pacing = self.config.pacing
        self.pause(pacing.modal)

        if self._visible_modal() is None:
            return False

        self.log("Modal detected, attempting to close...")
        if close_button := self.CLOSE_MODAL.locate(self.page):
            close_button.click(force=True)
        else:
            self.page.keyboard.press("Escape")
        self.pause(pacing.modal)
        return True

    def verify_product_added_to_cart(self) -> bool:
        """Look for a success indicator; absence is only logged."""
        selector = self.first_matching(self.SUCCESS)
        if selector is None:
            self.warn("No add-to-cart confirmation shown")
            return False
        self.log("Add-to-cart confirmation found")
        return True

    def select_variant(self, kind: str = "size", index: int = 0) -> bool:
        """Pick a size or colour option if the product has one."""
        chain = self.VARIANTS.get(kind)
        if chain is None:
            raise ValueError(f"Unknown variant type: {kind}")

        selector = self.first_matching(chain)
        if selector is None:
            return False
        self.page.locator(selector).nth(index).click(force=True)
        self.pause(self.config.pacing.modal)
        return True

    def complete_add_to_cart_flow(self) -> SelectedProduct:
        """Store product info, add it to the cart and dismiss any modal."""
        product = self.store_product_info()
        self.add_to_cart()
        self.handle_add_to_cart_modal()
        self.verify_product_added_to_cart()
        return product
