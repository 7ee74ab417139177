"""Checksum coordinator - orchestrates the generate and verify workflows.

# FILE_CONTEXT: Composes sampling, retry, record format and remapping
# ROLE: Fans per-item work out over ParallelExecutor, then reports results
#   serially in input order
# FAILURES: Per-item errors are counted and reported, never propagated;
#   only an unreadable check file aborts a verify run (before any item work)
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from loguru import logger

from partialsum.core.config.checksum_config import ChecksumConfig
from partialsum.core.exceptions import CheckFileError, MalformedRecordLineError
from partialsum.utils.paths import PathRemapper
from partialsum.utils.records import (
    format_record_line,
    iter_check_lines,
    parse_record_line_strict,
)

from .batch_processor import ItemResult, ParallelExecutor, ProgressObserver
from .retry import RetryPolicy, compute_hash_with_retry

Writer = Callable[[str], None]


def _stdout(line: str) -> None:
    print(line, file=sys.stdout)


def _stderr(line: str) -> None:
    print(line, file=sys.stderr)


def exit_code_for(failed: int, skip_errors: bool) -> int:
    """Exit status of a run: 1 only for unabsorbed failures."""
    return 1 if failed > 0 and not skip_errors else 0


class VerificationOutcome(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    COMPUTATION_FAILED = "computation_failed"
    MALFORMED = "malformed"


@dataclass
class VerificationResult:
    """Outcome of verifying one record line."""

    path: str
    outcome: VerificationOutcome
    expected: str = ""
    actual: str | None = None
    error: Exception | None = None


@dataclass
class GenerateSummary:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    lines: list[str] = field(default_factory=list)
    exit_code: int = 0


@dataclass
class VerifySummary:
    total: int = 0
    ok: int = 0
    failed: int = 0
    outcomes: list[VerificationResult] = field(default_factory=list)
    exit_code: int = 0


class ChecksumCoordinator:
    """Runs generate and verify over a list of files or record lines.

    Output is written through ``out``/``err`` callables so that the CLI can
    send it to stdout/stderr and tests can capture it.
    """

    def __init__(
        self,
        config: ChecksumConfig,
        progress: ProgressObserver | None = None,
        out: Writer | None = None,
        err: Writer | None = None,
    ):
        """Initialize checksum coordinator.

        Args:
            config: Immutable checksum configuration for the run
            progress: Optional observer ticked once per completed item
            out: Writer for result lines (default: stdout)
            err: Writer for failure lines and summaries (default: stderr)
        """
        self.config = config
        self.progress = progress
        self._out = out or _stdout
        self._err = err or _stderr
        self._retry = RetryPolicy(retries=config.read_retries)
        self._remapper = PathRemapper(config.old_base, config.new_base)
        self._executor = ParallelExecutor(
            max_workers=config.max_workers, progress=progress
        )

    def compute_hash(self, path: Path) -> str:
        """Partial checksum of one file under the retry policy."""
        return compute_hash_with_retry(
            path,
            partial_bytes=self.config.partial_bytes,
            include_modtime=self.config.include_modtime,
            policy=self._retry,
        )

    def _report_item_error(self, path: str, error: Exception, verify: bool) -> None:
        if self.config.skip_errors:
            logger.warning(f"Skipping file '{path}': {error}")
        elif verify:
            self._err(f"{path}: FAILED to compute hash ({error})")
        else:
            logger.error(f"Could not process file '{path}': {error}")

    # SECTION: Generate

    async def generate(self, files: Sequence[Path]) -> GenerateSummary:
        """Compute and emit a record line for every file, in input order."""
        summary = GenerateSummary(total=len(files))
        self._err(
            f"Found {summary.total} files. Computing partial checksums..."
        )

        results: list[ItemResult[Path, str]] = await self._executor.map(
            self.compute_hash, list(files)
        )

        for result in results:
            if result.ok:
                line = format_record_line(result.value, str(result.item))
                summary.lines.append(line)
                self._out(line)
                summary.succeeded += 1
            else:
                self._report_item_error(str(result.item), result.error, verify=False)
                summary.failed += 1

        self._err(
            f"\nSummary: total files = {summary.total}, "
            f"succeeded = {summary.succeeded}, errors = {summary.failed}"
        )
        summary.exit_code = exit_code_for(summary.failed, self.config.skip_errors)
        return summary

    # SECTION: Verify

    def _verify_line(self, line: str) -> VerificationResult:
        try:
            expected, recorded_path = parse_record_line_strict(line)
        except MalformedRecordLineError as e:
            # No file I/O for lines that do not parse
            return VerificationResult(
                path=line, outcome=VerificationOutcome.MALFORMED, error=e
            )

        target = self._remapper(recorded_path)
        try:
            actual = self.compute_hash(target)
        except Exception as e:
            return VerificationResult(
                path=recorded_path,
                outcome=VerificationOutcome.COMPUTATION_FAILED,
                expected=expected,
                error=e,
            )

        outcome = (
            VerificationOutcome.MATCH
            if actual == expected
            else VerificationOutcome.MISMATCH
        )
        return VerificationResult(
            path=recorded_path, outcome=outcome, expected=expected, actual=actual
        )

    async def verify_lines(self, lines: Sequence[str]) -> VerifySummary:
        """Verify already-trimmed record lines, reporting in input order."""
        summary = VerifySummary(total=len(lines))
        self._err(f"Found {summary.total} checks to perform. Verifying...")
        if self._remapper.enabled:
            logger.debug(
                f"Remapping '{self.config.old_base}' -> '{self.config.new_base}'"
            )

        results: list[ItemResult[str, VerificationResult]] = await self._executor.map(
            self._verify_line, list(lines)
        )

        for result in results:
            verification = result.value
            if verification is None:
                # _verify_line only raises on programming errors
                verification = VerificationResult(
                    path=result.item,
                    outcome=VerificationOutcome.COMPUTATION_FAILED,
                    error=result.error,
                )
            summary.outcomes.append(verification)

            if verification.outcome is VerificationOutcome.MATCH:
                self._out(f"{verification.path}: OK")
                summary.ok += 1
            elif verification.outcome is VerificationOutcome.MISMATCH:
                self._err(f"{verification.path}: FAILED (mismatch)")
                summary.failed += 1
            else:
                self._report_item_error(
                    verification.path, verification.error, verify=True
                )
                summary.failed += 1

        self._err(
            f"\nSummary: total checks = {summary.total}, "
            f"OK = {summary.ok}, FAILED = {summary.failed}"
        )
        summary.exit_code = exit_code_for(summary.failed, self.config.skip_errors)
        return summary

    async def verify(self, check_file: Path) -> VerifySummary:
        """Verify every record in ``check_file``.

        Raises:
            CheckFileError: The check file cannot be read
        """
        return await self.verify_lines(read_check_file(check_file))


def read_check_file(check_file: Path) -> list[str]:
    """Read the record lines of a checksum file.

    Raises:
        CheckFileError: The file cannot be opened or read
    """
    try:
        contents = Path(check_file).read_text(
            encoding="utf-8", errors="surrogateescape"
        )
    except OSError as e:
        raise CheckFileError(check_file, str(e)) from e
    return iter_check_lines(contents)
