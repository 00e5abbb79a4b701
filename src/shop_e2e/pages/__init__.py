"""Page objects for the shop."""

from .base_page import BasePage
from .cart_page import CartPage
from .category_page import CategoryPage
from .product_page import ProductPage

__all__ = ["BasePage", "CartPage", "CategoryPage", "ProductPage"]
