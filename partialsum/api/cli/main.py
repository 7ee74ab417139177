"""CLI entry point for partialsum."""

import argparse
import asyncio
import sys

from loguru import logger

from partialsum.core.config.config import Config
from partialsum.core.exceptions import ConfigurationError

from .parsers import create_main_parser


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Whether to enable verbose logging
    """
    logger.remove()

    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
        )
    else:
        logger.add(sys.stderr, level="INFO", format="<level>{message}</level>")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate command-line arguments."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.check is None and not args.paths:
        parser.error("the following arguments are required: paths (unless --check is given)")

    return args


async def async_main(argv: list[str] | None = None) -> int:
    """Async main entry point for the CLI.

    Returns:
        Process exit status
    """
    args = parse_args(argv)
    setup_logging(args.verbose or args.debug)

    try:
        config = Config.from_cli_args(args)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    if args.check is not None:
        from .commands.verify import verify_command

        return await verify_command(args, config)

    from .commands.generate import generate_command

    return await generate_command(args, config)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    try:
        exit_code = asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
