"""Pydantic schemas for extraction results and the HTTP payloads around them."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DIRECTIONS: frozenset[str] = frozenset({"ltr", "rtl"})


def normalize_direction(value: Any) -> str:
    """Return ``"ltr"`` / ``"rtl"`` for a direction token, ``""`` for anything else."""
    if not isinstance(value, str):
        return ""
    token = value.strip().lower()
    return token if token in DIRECTIONS else ""


# ---------------------------------------------------------------------------
# Back-end selector
# ---------------------------------------------------------------------------

class ParserType(StrEnum):
    READABILITY = "readability"
    SIMPLE = "simple"
    POSTLIGHT = "postlight"
    DEFUDDLE = "defuddle"

    @property
    def label(self) -> str:
        return _PARSER_LABELS[self]


_PARSER_LABELS: dict[ParserType, str] = {
    ParserType.READABILITY: "Readability",
    ParserType.SIMPLE: "Simple",
    ParserType.POSTLIGHT: "Postlight",
    ParserType.DEFUDDLE: "Defuddle",
}


class RawArticle(NamedTuple):
    """Whatever a back-end managed to produce, before normalization."""

    content: str | None = None
    text_content: str | None = None
    title: str | None = None
    byline: str | None = None
    excerpt: str | None = None
    dir: str | None = None


# ---------------------------------------------------------------------------
# Extraction result
# ---------------------------------------------------------------------------

class ExtractionResult(BaseModel):
    """Normalized article produced by every back-end.

    Optional fields are always strings: a back-end that has nothing to say
    about a field leaves it as ``""``.  ``content`` and ``textContent`` must be
    supplied, but may be empty.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    byline: str = ""
    dir: str = ""
    excerpt: str = ""
    content: str
    text_content: str = Field(alias="textContent")

    @field_validator("title", "byline", "excerpt", "content", "text_content", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("dir", mode="before")
    @classmethod
    def check_direction(cls, v: Any) -> str:
        return normalize_direction(v)

    @classmethod
    def from_raw(cls, raw: RawArticle, *, default_dir: str = "ltr") -> ExtractionResult:
        """Build a result from back-end output, filling ``dir`` from *default_dir*."""
        return cls(
            title=raw.title,
            byline=raw.byline,
            dir=normalize_direction(raw.dir) or default_dir,
            excerpt=raw.excerpt,
            content=raw.content,
            text_content=raw.text_content,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (``textContent`` rather than ``text_content``)."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------

class ParseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    html: str
    # Left as a plain string so unknown tags reach the dispatcher
    parser_type: str = Field(alias="parserType")


class ParseResponse(BaseModel):
    result: ExtractionResult
    markdown: str


class ErrorResponse(BaseModel):
    error: str


class FormatRequest(BaseModel):
    html: str


class FormatResponse(BaseModel):
    html: str


class ParserInfo(BaseModel):
    key: str
    label: str
