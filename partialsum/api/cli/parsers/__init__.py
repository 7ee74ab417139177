"""Argument parser for the partialsum CLI."""

import argparse
from pathlib import Path

from partialsum.core.config.checksum_config import ChecksumConfig
from partialsum.version import __version__

EXAMPLES = """\
EXAMPLES:
  1) Generate partial sums (NO modtime):
     partialsum some_directory > partialsums.txt

  2) Verify partial sums:
     partialsum --check partialsums.txt

  3) Remap old base to new base:
     partialsum --check partialsums.txt --remap /old/path /new/path

  4) If you used cp -p / cp -a (preserving modtime), add:
     partialsum --include-modtime some_directory > partialsums.txt
     partialsum --check partialsums.txt --include-modtime

NOTE:
  - Creation time (birth time) is never hashed. If modtime isn't preserved
    (vanilla cp), rely on the default setting.
"""


def create_main_parser() -> argparse.ArgumentParser:
    """Create the partialsum argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="partialsum",
        description="Generate/check partial checksums",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"partialsum {__version__}",
    )
    parser.add_argument(
        "-c",
        "--check",
        type=Path,
        metavar="FILE",
        help="Read checksums from the specified file and verify them",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Paths to process (directories/files)",
    )

    ChecksumConfig.add_cli_arguments(parser)

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Never show the progress bar",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file path (JSON)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    return parser


__all__: list[str] = ["create_main_parser"]
