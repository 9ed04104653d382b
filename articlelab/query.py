"""articlelab.query - run one extraction back-end and render the result.

Basic usage::

    from articlelab.query import extract, parse

    result = extract(html, "readability")
    print(result.title)
    print(result.text_content)

    parsed = parse(html, "defuddle")
    print(parsed.markdown)

The back-end set is closed: ``readability``, ``simple``, ``postlight`` and
``defuddle``.  Any other tag raises :class:`UnsupportedBackend` before the
HTML is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

from articlelab.extractors.backends import (
    extract_defuddle,
    extract_postlight,
    extract_readability,
    extract_simple,
)
from articlelab.extractors.dom import document_direction, parse_document
from articlelab.extractors.markdown import render_markdown
from articlelab.items import ExtractionResult, ParserInfo, ParserType, RawArticle

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exceptions
# ---------------------------------------------------------------------------

class UnsupportedBackend(ValueError):
    """Raised when the requested back-end tag is not one of the known four.

    Attributes:
        backend -- the tag that was requested
    """

    def __init__(self, backend: str) -> None:
        super().__init__("Unsupported parser type")
        self.backend = backend


class ExtractionFailure(RuntimeError):
    """Raised when a back-end library errors out on the given HTML.

    The message is the underlying library's message; the original exception
    is available as ``__cause__``.

    Attributes:
        backend -- the back-end that failed
    """

    def __init__(self, message: str, backend: str = "") -> None:
        super().__init__(message)
        self.backend = backend


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

_BACKENDS: dict[ParserType, Callable[[str], RawArticle]] = {
    ParserType.READABILITY: extract_readability,
    ParserType.SIMPLE: extract_simple,
    ParserType.POSTLIGHT: extract_postlight,
    ParserType.DEFUDDLE: extract_defuddle,
}


def _resolve_backend(backend: str | ParserType) -> ParserType:
    try:
        return ParserType(backend)
    except ValueError:
        raise UnsupportedBackend(str(backend)) from None


def available_parsers() -> list[ParserInfo]:
    """Return every supported back-end as ``{key, label}``, in display order."""
    return [ParserInfo(key=p.value, label=p.label) for p in ParserType]


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract(html: str, backend: str | ParserType) -> ExtractionResult:
    """Run *backend* over *html* and return a normalized :class:`ExtractionResult`.

    Args:
        html:    Raw HTML of the page.  Malformed markup is accepted.
        backend: One of ``"readability"``, ``"simple"``, ``"postlight"``,
                 ``"defuddle"`` (or the matching :class:`ParserType`).

    Returns:
        :class:`~articlelab.items.ExtractionResult` with every optional field
        defaulted to ``""``.  ``dir`` falls back to the ``dir`` attribute of
        the input document, then ``"ltr"``.

    Raises:
        UnsupportedBackend: *backend* is not a known tag.
        ExtractionFailure:  The back-end library raised.
    """
    parser_type = _resolve_backend(backend)
    run = _BACKENDS[parser_type]

    logger.info("extracting with %s (%d chars of html)", parser_type, len(html))
    try:
        raw = run(html)
    except Exception as exc:
        logger.warning("%s extraction failed: %s", parser_type, exc)
        raise ExtractionFailure(str(exc) or type(exc).__name__, backend=parser_type.value) from exc

    default_dir = document_direction(parse_document(html)) or "ltr"
    result = ExtractionResult.from_raw(raw, default_dir=default_dir)
    logger.debug(
        "%s extracted title=%r content=%d chars text=%d chars",
        parser_type, result.title, len(result.content), len(result.text_content),
    )
    return result


class ParsedArticle(NamedTuple):
    result: ExtractionResult
    markdown: str


def parse(html: str, backend: str | ParserType) -> ParsedArticle:
    """Extract *html* with *backend* and render the article as Markdown.

    Raises the same exceptions as :func:`extract`; rendering itself never fails.
    """
    result = extract(html, backend)
    return ParsedArticle(result=result, markdown=render_markdown(result))
