"""Command-line entry point for running the gallery kiosk server."""

import argparse
from collections.abc import Sequence

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve the event gallery with selfie search"
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and start uvicorn with a single worker.

    One worker only: the camera can be opened by a single process.
    """
    args = build_parser().parse_args(argv)
    uvicorn.run(
        "event_gallery.api.asgi:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
    )


if __name__ == "__main__":
    main()
