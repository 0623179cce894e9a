# main.py

"""Entry point for the mercadolibre_source plugin (headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("ml_source.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="mercadolibre_source",
        description=(
            "Import a Mercado Libre seller's catalog as content nodes."
        ),
    )
    parser.add_argument(
        "--site-id",
        default=Settings.SITE_ID,
        dest="site_id",
        help="Mercado Libre site id, e.g. MLA (default: $MERCADOLIBRE_SITE_ID).",
    )
    parser.add_argument(
        "--username",
        default=Settings.USERNAME,
        help="Seller nickname (default: $MERCADOLIBRE_USERNAME).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom output directory for node dumps (default: results/).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="DEBUG",
        dest="log_level",
        help="Show debug messages on the console.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="WARNING",
        dest="log_level",
        help="Only show warnings and errors on the console.",
    )
    return parser


def main() -> None:
    """Parse arguments and run one sync."""
    args = _build_parser().parse_args()

    log_file = setup_logging(args.log_level)
    logger.debug("mercadolibre_source starting, log file: %s", log_file)

    from src.cli.runner import cli_source

    exit_code = asyncio.run(
        cli_source(
            site_id=args.site_id,
            username=args.username,
            output_format=args.output_format,
            output_dir=args.output_dir,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
