"""Checksum configuration for partialsum.

This module provides configuration for sampling, verification and the
parallel fan-out used by both generate and verify.
"""

import argparse
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUE_VALUES = ("true", "1", "yes")


class ChecksumConfig(BaseModel):
    """Configuration for partial checksum generation and verification.

    Immutable for the duration of a run.
    """

    model_config = ConfigDict(frozen=True)

    partial_bytes: int = Field(
        default=100, ge=1, description="Bytes read from start, middle and end"
    )
    include_modtime: bool = Field(
        default=False, description="Hash the modification time (whole seconds)"
    )
    skip_errors: bool = Field(
        default=False,
        description="Report per-file failures as warnings and exit 0",
    )
    remap: tuple[Path, Path] | None = Field(
        default=None, description="(old_base, new_base) used during verification"
    )

    # Execution settings
    max_workers: int = Field(
        default=0, ge=0, description="Worker pool cap (0 = auto from CPU count)"
    )
    read_retries: int = Field(
        default=2, ge=0, description="Extra attempts on transient read/seek errors"
    )

    # Traversal settings
    exclude: list[str] = Field(
        default_factory=list, description="Glob patterns to skip during traversal"
    )
    follow_links: bool = Field(
        default=False, description="Descend into symlinked directories"
    )

    @field_validator("exclude")
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Drop empty and duplicate patterns, preserving order."""
        seen = set()
        unique = []
        for pattern in v:
            if pattern and pattern not in seen:
                seen.add(pattern)
                unique.append(pattern)
        return unique

    @property
    def old_base(self) -> Path | None:
        return self.remap[0] if self.remap else None

    @property
    def new_base(self) -> Path | None:
        return self.remap[1] if self.remap else None

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add checksum-related CLI arguments."""
        parser.add_argument(
            "--remap",
            nargs=2,
            metavar=("OLD_BASE", "NEW_BASE"),
            help=(
                "Remaps old base path to new base path during verification. "
                "E.g., --remap OLD_BASE NEW_BASE"
            ),
        )
        parser.add_argument(
            "--skip-errors",
            action="store_true",
            help=(
                "Skip files that produce read/metadata errors instead of "
                "marking them as FAILED"
            ),
        )
        parser.add_argument(
            "--partial-bytes",
            type=int,
            default=None,
            metavar="N",
            help="Number of bytes to read from start, middle, and end (default: 100)",
        )
        parser.add_argument(
            "--include-modtime",
            action="store_true",
            help=(
                "By default, modtime is NOT hashed. Use this flag if you "
                "explicitly want to include modtime."
            ),
        )
        parser.add_argument(
            "--exclude",
            action="append",
            metavar="PATTERN",
            help="File patterns to exclude (can be specified multiple times)",
        )
        parser.add_argument(
            "--max-workers",
            type=int,
            default=None,
            metavar="N",
            help="Maximum concurrent workers (default: number of CPUs)",
        )
        parser.add_argument(
            "--follow-links",
            action="store_true",
            help="Follow symbolic links to directories while walking",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load checksum config from environment variables."""
        config: dict[str, Any] = {}

        if partial_bytes := os.getenv("PARTIALSUM_CHECKSUM__PARTIAL_BYTES"):
            config["partial_bytes"] = partial_bytes
        if include_modtime := os.getenv("PARTIALSUM_CHECKSUM__INCLUDE_MODTIME"):
            config["include_modtime"] = include_modtime.lower() in _TRUE_VALUES
        if skip_errors := os.getenv("PARTIALSUM_CHECKSUM__SKIP_ERRORS"):
            config["skip_errors"] = skip_errors.lower() in _TRUE_VALUES
        if max_workers := os.getenv("PARTIALSUM_CHECKSUM__MAX_WORKERS"):
            config["max_workers"] = max_workers
        if retries := os.getenv("PARTIALSUM_CHECKSUM__READ_RETRIES"):
            config["read_retries"] = retries
        if follow := os.getenv("PARTIALSUM_CHECKSUM__FOLLOW_LINKS"):
            config["follow_links"] = follow.lower() in _TRUE_VALUES

        # Comma-separated exclude patterns
        if exclude := os.getenv("PARTIALSUM_CHECKSUM__EXCLUDE"):
            config["exclude"] = exclude.split(",")

        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract checksum config from CLI arguments."""
        overrides: dict[str, Any] = {}

        if getattr(args, "partial_bytes", None) is not None:
            overrides["partial_bytes"] = args.partial_bytes
        if getattr(args, "include_modtime", False):
            overrides["include_modtime"] = True
        if getattr(args, "skip_errors", False):
            overrides["skip_errors"] = True
        if getattr(args, "remap", None):
            old_base, new_base = args.remap
            overrides["remap"] = (Path(old_base), Path(new_base))
        if getattr(args, "max_workers", None) is not None:
            overrides["max_workers"] = args.max_workers
        if getattr(args, "exclude", None):
            overrides["exclude"] = list(args.exclude)
        if getattr(args, "follow_links", False):
            overrides["follow_links"] = True

        return overrides

    def __repr__(self) -> str:
        return (
            f"ChecksumConfig("
            f"partial_bytes={self.partial_bytes}, "
            f"include_modtime={self.include_modtime}, "
            f"skip_errors={self.skip_errors}, "
            f"remap={self.remap})"
        )
