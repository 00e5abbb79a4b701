"""Category page - lists products and picks one to open."""

import random

from playwright.sync_api import Page

from ..config import SuiteConfig
from ..dom import extract_hrefs
from ..links import NoProductLinksError, filter_product_links, pick_index
from .base_page import BasePage


class CategoryPage(BasePage):
    """Page object for a product category listing."""

    LINK_SELECTOR = "a[href]"

    def __init__(self, page: Page, config: SuiteConfig, rng: random.Random | None = None):
        super().__init__(page, config)
        self.rng = rng or random.Random()

    def get_category_name(self, key: str) -> str:
        category = self.config.categories.get(key)
        return category.name if category else key

    def visit_category(self, key: str) -> None:
        """Open a category, accept cookies and scroll to load more products."""
        pacing = self.config.pacing
        self.log(f"Navigating to: {self.get_category_name(key)}")
        self.visit(self.config.category_path(key))

        # Listing is rendered client-side
        self.pause(pacing.category_render)
        self.handle_cookie_consent()

        self.pause(pacing.lazy_load)
        self.scroll_by(800)
        self.pause(pacing.lazy_load)
        self.log("Category page loaded")

    def verify_category_loaded(self, key: str) -> None:
        path = self.config.category_path(key)
        assert path in self.page.url, f"Expected category path {path} in {self.page.url}"
        self.log(f"Category '{self.get_category_name(key)}' loaded")

    def wait_for_products_to_load(self) -> bool:
        """Wait until the page has any links at all."""
        return self.wait_for(
            lambda: self.page.locator(self.LINK_SELECTOR).count() > 0,
            self.config.timeouts.command,
        )

    def scroll_to_load_more(self) -> None:
        self.page.keyboard.press("End")
        self.pause(self.config.pacing.settle)

    def get_product_count(self) -> int:
        """Number of links on the page."""
        return self.page.locator(self.LINK_SELECTOR).count()

    def collect_links(self) -> list[str]:
        """Every anchor href in the current DOM snapshot."""
        self.wait_for_products_to_load()
        return extract_hrefs(self.page.content())

    def find_product_links(self) -> list[str]:
        """Candidate product paths; raises when none can be found."""
        product_links = filter_product_links(self.collect_links(), self.config.base_url)
        if not product_links:
            raise NoProductLinksError(f"No product links found on page {self.page.url}")
        self.log(f"Found {len(product_links)} potential product links")
        return product_links

    def select_random_product(self, index: int | None = None) -> str:
        """Open a product from the listing and return its path.

        Without an index a product is drawn at random from the first few.
        """
        self.pause(self.config.pacing.settle)
        product_links = self.find_product_links()

        selected_index = pick_index(len(product_links), index, self.rng)
        selected_url = product_links[selected_index]
        self.log(f"Selected URL at index {selected_index}: {selected_url}")

        self.visit(selected_url)
        return selected_url

    def select_product_by_index(self, index: int) -> str:
        return self.select_random_product(index)
