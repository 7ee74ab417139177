"""Verify command module - checks files against a saved checksum file."""

import argparse

from loguru import logger

from partialsum.core.config.config import Config
from partialsum.core.exceptions import CheckFileError
from partialsum.services.checksum_coordinator import (
    ChecksumCoordinator,
    read_check_file,
)

from ..utils.rich_output import RichOutputFormatter


async def verify_command(args: argparse.Namespace, config: Config) -> int:
    """Execute verify mode (``--check FILE``).

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance

    Returns:
        Process exit status; 1 when the check file cannot be read
    """
    formatter = RichOutputFormatter(
        show_progress=False if args.no_progress else None,
    )
    checksum = config.checksum
    logger.debug(f"Verifying {args.check} with {checksum!r}")

    try:
        lines = read_check_file(args.check)
    except CheckFileError as e:
        formatter.err(str(e))
        return 1

    progress = formatter.create_progress("lines", len(lines))
    if progress is None:
        coordinator = ChecksumCoordinator(
            checksum, out=formatter.out, err=formatter.err
        )
        summary = await coordinator.verify_lines(lines)
    else:
        with progress:
            coordinator = ChecksumCoordinator(
                checksum, progress=progress, out=formatter.out, err=formatter.err
            )
            summary = await coordinator.verify_lines(lines)

    return summary.exit_code
