"""
Text Extraction - Turn fetched HTML into text worth summarizing.

Supports:
- Tag stripping and paragraph-preserving HTML-to-text conversion
- Reader-mode article extraction (trafilatura, BeautifulSoup fallback)
- Anchor extraction from HTML fragments
- Comment extraction from discussion-thread pages
"""

import html as html_lib
import logging
import re
from dataclasses import dataclass

import trafilatura
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


TAG_RE = re.compile(r"<[^>]*>")
LINE_BREAK_RE = re.compile(r"<br\s*/?>|</li\s*>", re.I)
BLOCK_END_RE = re.compile(r"</(?:p|div|h[1-6]|ul|ol|table|blockquote|section|article)\s*>", re.I)

# Below this many characters a "main content" block is treated as navigation noise
MIN_ARTICLE_LENGTH = 250
EXCERPT_LENGTH = 200


@dataclass
class ReadableArticle:
    """Main readable content of a page."""
    title: str
    text: str
    excerpt: str


@dataclass
class ExtractedLink:
    """An anchor found in an HTML fragment."""
    url: str
    text: str


def strip_html_tags(html: str) -> str:
    """Remove every <...> sequence, keeping the remaining text in order."""
    if not html:
        return ""
    return TAG_RE.sub("", html)


def html_to_text(html: str) -> str:
    """
    Convert an HTML fragment to plain text, keeping paragraph structure.

    Block-level closing tags become blank lines and <br>/<li> become line
    breaks, so paragraphs in the source stay blank-line separated.
    """
    if not html:
        return ""
    text = LINE_BREAK_RE.sub("\n", html)
    text = BLOCK_END_RE.sub("\n\n", text)
    text = html_lib.unescape(strip_html_tags(text))

    lines = [re.sub(r"[ \t\xa0]+", " ", line).strip() for line in text.splitlines()]
    text = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def extract_readable(html: str, url: str) -> ReadableArticle | None:
    """
    Extract the main article of a page.

    Args:
        html: Raw HTML document
        url: URL the document came from (used for metadata resolution)

    Returns:
        ReadableArticle, or None when no main content block can be identified
    """
    if not html or not html.strip():
        return None

    article = _extract_with_trafilatura(html, url)
    if article and len(article.text) >= MIN_ARTICLE_LENGTH:
        return article

    article = _extract_with_beautifulsoup(html)
    if article and len(article.text) >= MIN_ARTICLE_LENGTH:
        return article

    logger.warning(f"Could not extract main content from {url}")
    return None


def _extract_with_trafilatura(html: str, url: str) -> ReadableArticle | None:
    """Reader-mode extraction using trafilatura."""
    try:
        text = trafilatura.extract(
            html,
            url=url,
            include_comments=False,
            include_tables=True,
            favor_recall=True,
        )
        if not text:
            return None

        metadata = trafilatura.extract_metadata(html, default_url=url)
        title = metadata.title if metadata and metadata.title else ""
        description = metadata.description if metadata and metadata.description else ""
    except Exception as e:
        logger.debug(f"trafilatura failed for {url}: {e}")
        return None

    return ReadableArticle(
        title=title or _title_from_html(html),
        text=text.strip(),
        excerpt=description or _make_excerpt(text),
    )


def _extract_with_beautifulsoup(html: str) -> ReadableArticle | None:
    """Fallback extraction using BeautifulSoup boilerplate removal."""
    soup = BeautifulSoup(html, "html.parser")
    title = _title_from_soup(soup)

    for tag in soup.find_all([
        "script", "style", "nav", "header", "footer", "aside",
        "noscript", "iframe", "form", "button", "input"
    ]):
        tag.decompose()

    for selector in [
        "[class*='ad-']", "[class*='advertisement']",
        "[class*='social']", "[class*='share']",
        "[class*='related']", "[class*='newsletter']",
        "[class*='subscribe']", "[class*='comment']",
    ]:
        for element in soup.select(selector):
            element.decompose()

    container = (
        soup.find("article") or
        soup.find(class_=re.compile(r"^(article|post|post-content|entry-content|story)$", re.I)) or
        soup.find(attrs={"role": "main"}) or
        soup.find("main") or
        soup.body
    )
    if container is None:
        return None

    paragraphs = [
        elem.get_text(" ", strip=True)
        for elem in container.find_all(["p", "h2", "h3", "h4", "li", "blockquote", "pre"])
    ]
    text = "\n\n".join(p for p in paragraphs if p)
    if not text:
        text = container.get_text("\n", strip=True)
    if not text:
        return None

    return ReadableArticle(title=title, text=text, excerpt=_make_excerpt(text))


def _title_from_soup(soup: BeautifulSoup) -> str:
    title = ""
    if title_tag := soup.find("title"):
        title = title_tag.get_text(strip=True)
    if not title:
        if h1 := soup.find("h1"):
            title = h1.get_text(strip=True)
    if not title:
        if og_title := soup.find("meta", property="og:title"):
            title = og_title.get("content", "")
    # Drop a trailing " | Site Name"
    return re.sub(r"\s*[|\-–—]\s*[^|\-–—]+$", "", title)


def _title_from_html(html: str) -> str:
    return _title_from_soup(BeautifulSoup(html, "html.parser"))


def _make_excerpt(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= EXCERPT_LENGTH:
        return text
    cut = text[:EXCERPT_LENGTH].rsplit(" ", 1)[0]
    return cut + "…"


def extract_links(fragment: str) -> list[ExtractedLink]:
    """
    Return every anchor with an href, in document order.

    Anchor text has its markup stripped. Links are neither deduplicated nor
    resolved against a base URL.
    """
    if not fragment:
        return []
    soup = BeautifulSoup(fragment, "html.parser")
    return [
        ExtractedLink(url=a["href"], text=a.get_text(" ", strip=True))
        for a in soup.find_all("a", href=True)
    ]


def extract_comments(html: str) -> list[str]:
    """Extract comment bodies from a Hacker News item page, in thread order."""
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    comments = []
    for node in soup.select(".commtext"):
        text = node.get_text("\n", strip=True)
        if text:
            comments.append(text)
    return comments
