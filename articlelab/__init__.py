"""articlelab - compare readability extractors on the same HTML.

Quick usage::

    from articlelab import extract, render_markdown

    result = extract(html, "readability")
    print(result.title)
    print(render_markdown(result))

Extract and render in one go::

    from articlelab import parse

    parsed = parse(html, "postlight")
    print(parsed.result.to_dict())
    print(parsed.markdown)

Serve the JSON API::

    python -m articlelab --port 8000
"""

__version__ = "0.1.0"

from articlelab.extractors.markdown import render_markdown  # noqa: E402
from articlelab.items import ExtractionResult, ParserType  # noqa: E402
from articlelab.query import (  # noqa: E402
    ExtractionFailure,
    UnsupportedBackend,
    available_parsers,
    extract,
    parse,
)

__all__ = [
    "ExtractionFailure",
    "ExtractionResult",
    "ParserType",
    "UnsupportedBackend",
    "available_parsers",
    "extract",
    "parse",
    "render_markdown",
]
