"""Extraction sub-package: back-end wrappers, DOM helpers and Markdown rendering."""

from .backends import extract_defuddle, extract_postlight, extract_readability, extract_simple
from .markdown import html_to_markdown, render_markdown

__all__ = [
    "extract_defuddle",
    "extract_postlight",
    "extract_readability",
    "extract_simple",
    "html_to_markdown",
    "render_markdown",
]
