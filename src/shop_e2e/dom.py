"""HTML snapshot helpers built on BeautifulSoup."""

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse a page snapshot."""
    return BeautifulSoup(html, "lxml")


def extract_hrefs(html: str) -> list[str]:
    """Raw ``href`` values of every anchor in document order."""
    soup = parse_html(html)
    hrefs = []
    for tag in soup.find_all("a", href=True):
        if isinstance(tag, Tag):
            hrefs.append(str(tag.get("href")))
    return hrefs


def visible_text(html: str) -> str:
    """Text content of the document body, ignoring scripts and styles."""
    soup = parse_html(html)
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    root = soup.body or soup
    return root.get_text(" ", strip=True)
