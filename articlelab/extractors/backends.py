"""The four extraction back-ends.

Each back-end is a plain function ``(html) -> RawArticle``.  They only wrap the
underlying library and map its output onto :class:`~articlelab.items.RawArticle`;
turning that into an :class:`~articlelab.items.ExtractionResult` (empty-string
defaults, ``dir`` fallback) is the dispatcher's job.

    readability  readability-lxml   (Mozilla Readability port)
    simple       BeautifulSoup      (<article> or every <p>)
    postlight    newspaper4k        (Mercury-style article parser, raw HTML in)
    defuddle     trafilatura        (boilerplate removal, HTML out, no Markdown)

Library exceptions are deliberately not caught here; the dispatcher wraps them
into :class:`~articlelab.query.ExtractionFailure`.
"""

from __future__ import annotations

import logging

import trafilatura  # type: ignore[import-untyped]
from bs4 import BeautifulSoup, Tag
from newspaper import Article  # type: ignore[import-untyped]
from readability import Document  # type: ignore[import-untyped]
from readability.readability import Unparseable  # type: ignore[import-untyped]

from articlelab import settings
from articlelab.extractors.dom import document_title, fragment_text, meta_content, parse_document
from articlelab.items import RawArticle

logger = logging.getLogger(__name__)

# Meta names Readability.js consults for article metadata, highest priority first
_BYLINE_META: tuple[str, ...] = (
    "dc:creator",
    "dcterm:creator",
    "author",
    "article:author",
    "parsely-author",
)
_EXCERPT_META: tuple[str, ...] = (
    "dc:description",
    "dcterm:description",
    "og:description",
    "description",
    "twitter:description",
)

_NO_ARTICLE = RawArticle(
    content="", text_content="", title="", byline="", excerpt="",
)


def _truncate(text: str) -> str:
    return text[: settings.EXCERPT_LENGTH]


def _paragraph_markup(soup: BeautifulSoup) -> tuple[str, str]:
    """Outer markup of every ``<p>`` concatenated, and their text newline-joined."""
    paragraphs = soup.find_all("p")
    content = "".join(str(p) for p in paragraphs)
    text_content = "\n".join(p.get_text() for p in paragraphs)
    return content, text_content


# ---------------------------------------------------------------------------
# readability
# ---------------------------------------------------------------------------

def _first_paragraph_text(content: str) -> str:
    first = parse_document(content).find("p")
    return first.get_text().strip() if isinstance(first, Tag) else ""


def _page_fragment(content: str) -> str:
    """Rename readability-lxml's ``<body id="readabilityBody">`` wrapper to a ``<div>``."""
    # html.parser leaves <body> where it is; lxml would hoist it out of the fragment
    fragment = BeautifulSoup(content, "html.parser")
    for body in fragment.find_all("body"):
        body.name = "div"
    return str(fragment)


def _article_direction(soup: BeautifulSoup, content: str) -> str | None:
    """``dir`` of the closest ancestor of the article's first paragraph that has one."""
    first_text = _first_paragraph_text(content)
    if not first_text:
        return None
    for p in soup.find_all("p"):
        if p.get_text().strip() != first_text:
            continue
        for ancestor in p.parents:
            direction = ancestor.get("dir")
            if direction:
                return str(direction)
        return None
    return None


def extract_readability(html: str) -> RawArticle:
    """Run readability-lxml over *html*.

    readability-lxml only finds the article body and title, so the byline and
    excerpt are read from ``<meta>`` tags the way Readability.js does, with the
    excerpt falling back to the first paragraph of the article.  ``dir`` comes
    from the nearest ancestor of that paragraph in the source document carrying
    a ``dir`` attribute.  When the library gives up (``Unparseable``) or finds
    no text, every field is empty.
    """
    soup = parse_document(html)
    try:
        doc = Document(html)
        content = _page_fragment(doc.summary(html_partial=True))
        title = doc.short_title()
    except Unparseable as exc:
        logger.debug("readability found no article: %s", exc)
        return _NO_ARTICLE

    text_content = fragment_text(content)
    if not text_content.strip():
        logger.debug("readability article has no text")
        return _NO_ARTICLE

    if title == settings.READABILITY_NO_TITLE:
        title = ""

    return RawArticle(
        content=content,
        text_content=text_content,
        title=title,
        byline=meta_content(soup, *_BYLINE_META),
        dir=_article_direction(soup, content),
        excerpt=meta_content(soup, *_EXCERPT_META) or _first_paragraph_text(content),
    )


# ---------------------------------------------------------------------------
# simple
# ---------------------------------------------------------------------------

def extract_simple(html: str) -> RawArticle:
    """Take the first ``<article>`` verbatim, or else every ``<p>`` in the page."""
    soup = parse_document(html)

    article = soup.find("article")
    if isinstance(article, Tag):
        content = article.decode_contents()
        text_content = article.get_text()
    else:
        content, text_content = _paragraph_markup(soup)

    return RawArticle(
        content=content,
        text_content=text_content,
        title=document_title(soup),
        byline="",
        excerpt=_truncate(text_content),
    )


# ---------------------------------------------------------------------------
# postlight
# ---------------------------------------------------------------------------

def _page_body(html: str) -> str:
    soup = parse_document(html)
    content, text_content = _paragraph_markup(soup)
    if text_content.strip():
        return content
    body = soup.body
    if body is None or not body.get_text().strip():
        return ""
    return body.decode_contents()


def extract_postlight(html: str) -> RawArticle:
    """Run newspaper4k on the raw markup.

    ``download(input_html=...)`` makes newspaper treat *html* as the page body
    instead of fetching the placeholder URL.  ``textContent`` is re-derived
    from the extracted HTML, not taken from ``Article.text``.

    newspaper finds no top node on very short pages and leaves ``article_html``
    empty; the page's paragraphs (or, without any, the body) are used instead.
    """
    if not html.strip():
        return _NO_ARTICLE

    article = Article(
        settings.PLACEHOLDER_URL,
        keep_article_html=True,
        fetch_images=False,
    )
    article.download(input_html=html)
    article.parse()

    content = article.article_html or ""
    text_content = fragment_text(content)
    if not text_content.strip():
        logger.debug("newspaper found no article body, using page body")
        content = _page_body(html)
        text_content = fragment_text(content)
    authors = [a for a in (article.authors or []) if a]

    return RawArticle(
        content=content,
        text_content=text_content,
        title=article.title,
        byline=", ".join(authors),
        excerpt=article.meta_description or _truncate(text_content.strip()),
    )


# ---------------------------------------------------------------------------
# defuddle
# ---------------------------------------------------------------------------

def _body_fragment(html: str) -> str:
    """Strip the ``<html><body>`` wrapper trafilatura puts around its output."""
    if not html:
        return ""
    body = parse_document(html).body
    return body.decode_contents() if body is not None else html


def extract_defuddle(html: str) -> RawArticle:
    """Run trafilatura with HTML output (Markdown output disabled)."""
    if not html.strip():
        return _NO_ARTICLE

    extracted = trafilatura.extract(
        html,
        output_format="html",
        include_links=True,
        include_images=True,
        include_tables=True,
        favor_recall=True,
        with_metadata=False,
    )
    if not extracted:
        logger.debug("trafilatura returned no content")
    metadata = trafilatura.extract_metadata(html)

    content = _body_fragment(extracted or "")
    return RawArticle(
        content=content,
        text_content=fragment_text(content),
        title=getattr(metadata, "title", None),
        byline=getattr(metadata, "author", None),
        excerpt=getattr(metadata, "description", None),
    )
