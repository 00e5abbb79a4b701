"""Tests for the product link heuristics."""

import random

import pytest

from shop_e2e.dom import extract_hrefs, visible_text
from shop_e2e.links import (
    NoProductLinksError,
    filter_product_links,
    is_excluded,
    is_loose_product_path,
    is_strict_product_path,
    pick_index,
    to_site_path,
)

BASE = "https://shop.test"


def anchors(*hrefs: str) -> str:
    links = "".join(f'<a href="{href}">link</a>' for href in hrefs)
    return f"<html><body>{links}</body></html>"


class TestToSitePath:
    """Tests for reducing hrefs to site paths."""

    def test_relative_path_is_kept(self):
        assert to_site_path("/sofa-1.html") == "/sofa-1.html"

    @pytest.mark.parametrize("href", [None, "", "#", "/", "#reviews", "javascript:void(0)", "mailto:a@b.de", "tel:0800"])
    def test_non_navigable_hrefs_are_dropped(self, href):
        assert to_site_path(href, BASE) is None

    def test_external_url_is_dropped(self):
        assert to_site_path("https://external.com/x", BASE) is None

    def test_same_host_url_becomes_path(self):
        assert to_site_path("https://shop.test/lamp-12.html?color=red", BASE) == "/lamp-12.html?color=red"

    def test_absolute_url_without_base_is_dropped(self):
        assert to_site_path("https://shop.test/lamp-12.html") is None

    def test_relative_without_slash_is_dropped(self):
        assert to_site_path("sofa-1.html", BASE) is None


class TestClassification:
    """Tests for the deny-list and the two heuristic tiers."""

    def test_deny_list(self):
        assert is_excluded("/help/returns")
        assert is_excluded("/cart/index/")
        assert is_excluded("/hc/de/articles/123-versand")
        assert not is_excluded("/sofa-123456.html")

    def test_strict_tier(self):
        assert is_strict_product_path("/sofa-123456.html")
        assert is_strict_product_path("/products/lamp")
        assert is_strict_product_path("/sofa-velvet-123456.html?sku=1")
        assert not is_strict_product_path("/blue-chair-42")

    def test_loose_tier(self):
        assert is_loose_product_path("/blue-chair-42")
        assert not is_loose_product_path("/moebel/")
        assert not is_loose_product_path("/sale2024")


class TestFilterProductLinks:
    """Tests for picking product links out of a page's anchors."""

    def test_strict_links_from_mixed_page(self):
        hrefs = extract_hrefs(anchors("/sofa-123456.html", "/help/returns", "https://external.com/x", "/products/lamp"))

        assert filter_product_links(hrefs, BASE) == ["/sofa-123456.html", "/products/lamp"]

    def test_loose_fallback_when_no_strict_match(self):
        hrefs = extract_hrefs(anchors("/moebel/", "/help/faq-1", "/blue-chair-42"))

        assert filter_product_links(hrefs, BASE) == ["/blue-chair-42"]

    def test_loose_tier_ignored_when_strict_matches(self):
        hrefs = ["/blue-chair-42", "/sofa-123456.html"]

        assert filter_product_links(hrefs, BASE) == ["/sofa-123456.html"]

    def test_duplicates_removed_in_page_order(self):
        hrefs = ["/b-2.html", "/a-1.html", "/b-2.html", "https://shop.test/a-1.html"]

        assert filter_product_links(hrefs, BASE) == ["/b-2.html", "/a-1.html"]

    def test_nothing_matches(self):
        assert filter_product_links(["/moebel/", "#", "/cart/index/"], BASE) == []


class TestPickIndex:
    """Tests for choosing which candidate to open."""

    def test_no_candidates_raises(self):
        with pytest.raises(NoProductLinksError):
            pick_index(0)

    def test_explicit_index(self):
        assert pick_index(5, 3) == 3

    def test_explicit_index_is_clamped(self):
        assert pick_index(2, 9) == 1
        assert pick_index(2, -4) == 0

    def test_random_pick_stays_in_first_five(self):
        rng = random.Random(1)
        picks = {pick_index(40, rng=rng) for _ in range(200)}

        assert picks <= {0, 1, 2, 3, 4}
        assert len(picks) > 1

    def test_random_pick_is_reproducible(self):
        first = [pick_index(10, rng=random.Random(3)) for _ in range(3)]
        second = [pick_index(10, rng=random.Random(3)) for _ in range(3)]

        assert first == second


class TestDom:
    """Tests for the HTML snapshot helpers."""

    def test_extract_hrefs_skips_anchors_without_href(self):
        html = '<body><a href="/a-1.html">a</a><a name="top">top</a><a href="#">b</a></body>'

        assert extract_hrefs(html) == ["/a-1.html", "#"]

    def test_visible_text_ignores_scripts(self):
        html = "<html><head><title>T</title></head><body><p>Sofa Grau</p><script>var x = 1;</script></body></html>"

        assert visible_text(html) == "Sofa Grau"
