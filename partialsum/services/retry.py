"""Bounded retry for transient per-file I/O failures."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from loguru import logger

from partialsum.core.exceptions import is_transient
from partialsum.utils.hashing import DEFAULT_PARTIAL_BYTES, partial_file_hash

T = TypeVar("T")

# Extra attempts after the first one (e.g. a flaky HDD)
READ_RETRIES = 2


@dataclass(frozen=True)
class RetryPolicy:
    """Retry an operation while it fails with a transient error.

    Only errors flagged ``transient`` (read and seek failures) are retried;
    metadata, open and parse errors propagate on first occurrence. When the
    retries run out the last error is re-raised unchanged.
    """

    retries: int = READ_RETRIES

    def run(self, operation: Callable[[], T], path: Path | str) -> T:
        attempts = 0
        while True:
            attempts += 1
            try:
                return operation()
            except Exception as e:
                if attempts <= self.retries and is_transient(e):
                    logger.warning(f"Retrying file '{path}': {e}")
                    continue
                raise


def compute_hash_with_retry(
    path: Path,
    partial_bytes: int = DEFAULT_PARTIAL_BYTES,
    include_modtime: bool = False,
    policy: RetryPolicy | None = None,
) -> str:
    """Compute a partial checksum, retrying transient read/seek errors."""
    policy = policy or RetryPolicy()
    return policy.run(
        lambda: partial_file_hash(path, partial_bytes, include_modtime), path
    )
