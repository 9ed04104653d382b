"""HTTP boundary: a small FastAPI app around :mod:`articlelab.query`.

Every failure is returned as ``{"error": message}``; a successful parse
returns ``{"result": ..., "markdown": ...}`` and never an error alongside it.
Unknown parser tags and malformed request bodies are client errors (400),
anything raised while extracting is a server error (500).

Run with ``python -m articlelab`` or ``uvicorn articlelab.api:app``.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from articlelab import __version__, settings
from articlelab.extractors.dom import prettify_html
from articlelab.items import FormatRequest, FormatResponse, ParseRequest, ParserInfo
from articlelab.query import UnsupportedBackend, available_parsers, parse

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


router = APIRouter()


@router.post("/parse")
def parse_article(payload: ParseRequest) -> JSONResponse:
    try:
        parsed = parse(payload.html, payload.parser_type)
    except UnsupportedBackend as exc:
        logger.info("rejected parser type %r", exc.backend)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception as exc:
        logger.exception("Error parsing article with %s", payload.parser_type)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or type(exc).__name__)

    return JSONResponse(
        content={"result": parsed.result.to_dict(), "markdown": parsed.markdown},
    )


@router.get("/parsers")
def list_parsers() -> list[ParserInfo]:
    return available_parsers()


@router.get("/sample")
def sample_html() -> FormatResponse:
    return FormatResponse(html=settings.SAMPLE_HTML_PATH.read_text(encoding="utf-8"))


@router.post("/format")
def format_html(payload: FormatRequest) -> FormatResponse:
    return FormatResponse(html=prettify_html(payload.html))


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=__version__,
)
app.include_router(router, prefix=settings.API_PREFIX, tags=["parse"])


@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Process-Time"] = str(time.perf_counter() - start_time)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return _error(status.HTTP_400_BAD_REQUEST, f"Invalid request: {problems}")


@app.get("/health")
def health_check() -> dict:
    return {"status": "healthy", "timestamp": time.time()}
