"""Generate command module - writes partial checksums for files and directories."""

import argparse

from loguru import logger

from partialsum.core.config.config import Config
from partialsum.services.checksum_coordinator import ChecksumCoordinator
from partialsum.utils.file_patterns import discover_files

from ..utils.rich_output import RichOutputFormatter


async def generate_command(args: argparse.Namespace, config: Config) -> int:
    """Execute generate mode.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance

    Returns:
        Process exit status
    """
    formatter = RichOutputFormatter(
        show_progress=False if args.no_progress else None,
    )
    checksum = config.checksum
    logger.debug(f"Generating with {checksum!r}")

    files = discover_files(
        args.paths,
        exclude_patterns=checksum.exclude,
        follow_links=checksum.follow_links,
    )

    progress = formatter.create_progress("files", len(files))
    if progress is None:
        coordinator = ChecksumCoordinator(
            checksum, out=formatter.out, err=formatter.err
        )
        summary = await coordinator.generate(files)
    else:
        with progress:
            coordinator = ChecksumCoordinator(
                checksum, progress=progress, out=formatter.out, err=formatter.err
            )
            summary = await coordinator.generate(files)

    return summary.exit_code
