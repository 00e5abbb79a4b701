"""Heuristics that guess which anchors on a category page lead to products.

The shop has no stable marker for product links, so links are classified by
URL shape in two tiers. The strict tier matches the known product URL forms;
the loose tier only runs when the strict tier finds nothing and accepts any
site-relative path with a dash and a digit. Both are best-effort: a path such
as ``/sale-2024`` passes the loose tier without being a product.
"""

import random
import re
from urllib.parse import urlsplit

# Path fragments that never lead to a product page
EXCLUDED_PATH_PARTS = (
    "/login",
    "/account",
    "/help",
    "/cart",
    "/customer",
    "/warranty",
    "/stores",
    "/about",
    "/contact",
    "/agb",
    "/datenschutz",
    "/impressum",
    "/support",
    "/hc/",
    "/articles/",
)

IGNORED_SCHEMES = ("javascript:", "mailto:", "tel:")

STRICT_PRODUCT_PATTERN = re.compile(r"/[\w-]+-\d+\.html$")
PRODUCT_PATH_PARTS = ("/products/", "/produkte/")

# Random picks are drawn from the first few candidates only
RANDOM_PICK_LIMIT = 5


class NoProductLinksError(Exception):
    """Raised when neither heuristic tier finds a product link."""


def to_site_path(href: str | None, base_url: str | None = None) -> str | None:
    """Reduce an href to a site-relative path, or None if it is not navigable.

    Absolute URLs are kept only when they point at the host of ``base_url``.
    """
    if not href:
        return None
    href = href.strip()
    if href in ("", "#", "/") or href.startswith("#"):
        return None
    if href.lower().startswith(IGNORED_SCHEMES):
        return None

    if href.startswith(("http://", "https://", "//")):
        if not base_url:
            return None
        parts = urlsplit(href if not href.startswith("//") else f"https:{href}")
        if parts.hostname != urlsplit(base_url).hostname:
            return None
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return path if path != "/" else None

    if not href.startswith("/"):
        return None
    return href


def is_excluded(path: str) -> bool:
    """Check the path against the non-product deny-list."""
    return any(part in path for part in EXCLUDED_PATH_PARTS)


def is_strict_product_path(path: str) -> bool:
    """Known product URL forms: ``/name-123456.html`` or ``/products/...``."""
    bare = path.split("?", 1)[0]
    if STRICT_PRODUCT_PATTERN.search(bare):
        return True
    return any(part in bare for part in PRODUCT_PATH_PARTS)


def is_loose_product_path(path: str) -> bool:
    """Any path with a dash and at least one digit."""
    return "-" in path and any(ch.isdigit() for ch in path)


def filter_product_links(hrefs: list[str], base_url: str | None = None) -> list[str]:
    """Return candidate product paths in page order, without duplicates.

    Falls back to the loose tier when the strict tier is empty. An empty
    result means neither tier matched.
    """
    paths: list[str] = []
    for href in hrefs:
        path = to_site_path(href, base_url)
        if path and not is_excluded(path) and path not in paths:
            paths.append(path)

    strict = [p for p in paths if is_strict_product_path(p)]
    if strict:
        return strict

    return [p for p in paths if is_loose_product_path(p)]


def pick_index(count: int, index: int | None = None, rng: random.Random | None = None) -> int:
    """Choose which of ``count`` candidates to open.

    An explicit index is clamped into range. Otherwise the index is drawn
    uniformly from the first ``RANDOM_PICK_LIMIT`` candidates.
    """
    if count <= 0:
        raise NoProductLinksError("No product links found on page")
    if index is not None:
        return min(max(index, 0), count - 1)
    rng = rng or random.Random()
    return rng.randrange(min(count, RANDOM_PICK_LIMIT))
