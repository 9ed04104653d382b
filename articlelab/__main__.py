"""Server entry point: python -m articlelab [--host HOST] [--port PORT]"""

from __future__ import annotations

import argparse
import logging

from articlelab import __version__, settings

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="articlelab",
        description="Serve the articlelab extraction API.",
    )
    parser.add_argument("--host", default=settings.HOST,
                        help=f"Interface to bind (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, metavar="N",
                        help=f"Port to listen on (default: {settings.PORT})")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    parser.add_argument("--reload", action="store_true", default=False,
                        help="Restart the server when source files change")
    return parser


def _configure_logging(level: str) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level,
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _print_banner(args: argparse.Namespace) -> None:
    from rich.console import Console
    from rich.panel import Panel

    console = Console()
    console.print(
        Panel.fit(
            f"[bold cyan]articlelab[/bold cyan] {__version__}\n"
            f"Listening:  [green]http://{args.host}:{args.port}[/green]\n"
            f"API:        [yellow]{settings.API_PREFIX}/parse[/yellow]\n"
            f"Log level:  {args.log_level}\n"
            f"Reload:     {'on' if args.reload else 'off'}",
            border_style="cyan",
            title="[bold]Configuration[/bold]",
        ),
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    _configure_logging(args.log_level)
    _print_banner(args)

    import uvicorn

    uvicorn.run(
        "articlelab.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
