"""CLI entry point for the FigureVault search server."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the FigureVault server."""
    parser = argparse.ArgumentParser(
        prog="figurevault",
        description="FigureVault — search for personal figure collections",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="YAML/JSON file of figure records to load into the in-memory store",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"FigureVault {_get_version()}",
    )

    args = parser.parse_args(argv)

    if args.reload and (args.config or args.seed):
        # The reloader rebuilds the app from the environment alone.
        parser.error("--reload cannot be combined with --config or --seed; use FIGUREVAULT_* environment variables")

    from figurevault.config.settings import Settings
    from figurevault.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.seed:
        if not Path(args.seed).exists():
            print(f"Error: Seed file not found: {args.seed}", file=sys.stderr)
            sys.exit(1)
        settings.store.seed_file = args.seed
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    import uvicorn

    from figurevault.api.app import create_app

    if args.reload:
        # Reload re-imports the app, so it has to come from the factory and the environment.
        uvicorn.run(
            "figurevault.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            reload=True,
            log_level=settings.observability.log_level,
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.observability.log_level,
    )


def _get_version() -> str:
    """Get the package version."""
    try:
        from figurevault import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
