"""Convert extracted article HTML to Markdown.

Two image rules sit on top of markdownify's defaults, checked in this order:

1. ``<a>`` wrapping an ``<img>``: emitted as the image alone, the link is dropped.
2. any other ``<img>``: ``alt`` (or ``aria-label``) and ``src`` (or ``data-src``).

Each rule returns the complete replacement for its element, so markdownify
never emits a second token for the same node.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup, Tag
from markdownify import MarkdownConverter  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from articlelab.items import ExtractionResult

logger = logging.getLogger(__name__)

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)


def _image_markdown(alt: str, src: str) -> str:
    return f"![{alt}]({src})"


class ArticleMarkdownConverter(MarkdownConverter):
    """markdownify converter with the link-wrapped and bare image rules."""

    def convert_a(self, el: Tag, text: str, parent_tags: Any) -> str:
        img = el.find("img")
        if not isinstance(img, Tag):
            return super().convert_a(el, text, parent_tags)

        # Only a missing attribute falls through here; src="" stays empty.
        alt = img.get("alt")
        src = img.get("src")
        if src is None:
            src = img.get("data-src")
        return _image_markdown(alt or "", src or "")

    def convert_img(self, el: Tag, text: str, parent_tags: Any) -> str:
        alt = el.get("alt") or el.get("aria-label") or ""
        src = el.get("src") or el.get("data-src") or ""
        return _image_markdown(alt, src)


def _detect_lang(el: object) -> str:
    """Extract language hint from an element's class list for markdownify."""
    try:
        getter = getattr(el, "get", None)
        classes = (getter("class") if getter else None) or []
        for cls in classes:
            if isinstance(cls, str) and cls.startswith("language-"):
                return cls[len("language-"):]
    except Exception as exc:
        logger.debug("Language detection failed for element: %s", exc)
    return ""


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown.

    A new converter is built for every call.  Post-processing strips trailing
    whitespace and collapses runs of blank lines.  Conversion errors fall back
    to the fragment's plain text instead of raising.
    """
    if not html or not html.strip():
        return ""

    try:
        converter = ArticleMarkdownConverter(
            heading_style="ATX",
            bullets="-",
            code_language_callback=_detect_lang,
        )
        md = converter.convert(html)
    except Exception as exc:
        logger.debug("markdownify failed, falling back to plain text: %s", exc)
        md = BeautifulSoup(html, "lxml").get_text(separator="\n")

    md = _TRAILING_WHITESPACE_RE.sub("", md)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip()


def render_markdown(result: ExtractionResult) -> str:
    """Render *result* as a Markdown document.

    A ``# title`` heading and an ``_byline_`` line are prepended when those
    fields are non-empty, each followed by a blank line, then the converted
    ``content``.
    """
    parts: list[str] = []
    if result.title:
        parts.append(f"# {result.title}\n\n")
    if result.byline:
        parts.append(f"_{result.byline}_\n\n")
    parts.append(html_to_markdown(result.content))
    return "".join(parts)
