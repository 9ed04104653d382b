"""Small DOM helpers shared by the back-ends and the API.

All parsing goes through BeautifulSoup with the lxml builder, which accepts
any markup without raising; malformed input simply produces a sparse tree.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from articlelab.items import normalize_direction

logger = logging.getLogger(__name__)


def _safe_str(val: Any, default: str = "") -> str:
    """Safely convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* into a fresh document tree."""
    return BeautifulSoup(html or "", "lxml")


def document_direction(soup: BeautifulSoup) -> str:
    """Return the ``dir`` of the root ``<html>`` element, or ``""`` if unset/invalid."""
    root = soup.find("html")
    if not isinstance(root, Tag):
        return ""
    return normalize_direction(_safe_str(root.get("dir")))


def document_title(soup: BeautifulSoup) -> str:
    """Text of the first ``<title>`` with whitespace collapsed, like ``document.title``."""
    title = soup.find("title")
    if not isinstance(title, Tag):
        return ""
    return " ".join(title.get_text().split())


def fragment_text(html: str) -> str:
    """Re-parse an HTML fragment and return the text of its body."""
    if not html:
        return ""
    body = parse_document(html).body
    return body.get_text() if body is not None else ""


def meta_content(soup: BeautifulSoup, *names: str) -> str | None:
    """Return the first non-empty ``<meta>`` content whose name/property matches.

    *names* are tried in priority order and compared case-insensitively.
    """
    metas: dict[str, str] = {}
    for meta in soup.find_all("meta"):
        if not isinstance(meta, Tag):
            continue
        key = _safe_str(meta.get("name") or meta.get("property")).strip().lower()
        content = _safe_str(meta.get("content")).strip()
        if key and content and key not in metas:
            metas[key] = content

    for name in names:
        value = metas.get(name.lower())
        if value:
            return value
    return None


def prettify_html(html: str) -> str:
    """Indent *html* for display and drop the blank lines the formatter leaves."""
    if not html or not html.strip():
        return ""
    # html.parser keeps fragments as fragments; lxml would wrap them in <html><body>
    formatted = BeautifulSoup(html, "html.parser").prettify()
    return "\n".join(line for line in formatted.splitlines() if line.strip())
