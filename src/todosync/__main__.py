"""CLI entry point for todosync."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="todosync",
        description="Prioritized to-do list that keeps working offline",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base address of the tasks API (default: $TODOSYNC_API_URL)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for the local task snapshot",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge CLI arguments over environment settings."""
    settings_kwargs: dict = {}
    if args.api_url:
        settings_kwargs["api_url"] = args.api_url
    if args.data_dir:
        settings_kwargs["data_dir"] = args.data_dir
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main() -> None:
    """Main entry point."""
    settings = build_settings(parse_args())

    setup_logging(settings)

    # Import here so --help and --version stay fast
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
