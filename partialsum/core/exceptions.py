"""Exception hierarchy for partialsum.

Errors raised while hashing a single file carry their own classification:
``transient`` is decided where the error originates (a failed read or seek)
and never inferred later from the message text.
"""

from enum import Enum
from pathlib import Path


class PartialSumError(Exception):
    """Base exception for partialsum operations."""

    pass


class ErrorStage(str, Enum):
    """Step of the sampling pipeline where a file operation failed."""

    METADATA = "metadata"
    OPEN = "open"
    READ_FIRST = "read_first"
    READ_MIDDLE = "read_middle"
    READ_LAST = "read_last"
    SEEK_MIDDLE = "seek_middle"
    SEEK_LAST = "seek_last"


class HashComputationError(PartialSumError):
    """Raised when a partial checksum cannot be computed for one file."""

    transient: bool = False
    label: str = "hash error"

    def __init__(self, path: Path | str, stage: ErrorStage, reason: str):
        self.path = Path(path)
        self.stage = stage
        self.reason = reason
        super().__init__(f"{self.label} ({self.stage.value}): {reason}")


class MetadataError(HashComputationError):
    """stat() failed for the file."""

    label = "metadata error"

    def __init__(self, path: Path | str, reason: str):
        super().__init__(path, ErrorStage.METADATA, reason)


class OpenError(HashComputationError):
    """File is missing or cannot be opened (e.g. permission denied)."""

    label = "file open error"

    def __init__(self, path: Path | str, reason: str):
        super().__init__(path, ErrorStage.OPEN, reason)


class ReadError(HashComputationError):
    """Reading one of the sample windows failed."""

    transient = True
    label = "read error"


class SeekError(HashComputationError):
    """Seeking to the middle or last window failed."""

    transient = True
    label = "seek error"


class MalformedRecordLineError(PartialSumError):
    """Raised when a checksum record line has no two-space separator."""

    def __init__(self, line: str):
        self.line = line
        super().__init__("Malformed line")


class CheckFileError(PartialSumError):
    """Raised when the checksum file given to --check cannot be read."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        super().__init__(f"Failed to read check file '{path}': {reason}")


class ConfigurationError(PartialSumError):
    """Raised for invalid configuration values or config files."""

    pass


def is_transient(error: BaseException) -> bool:
    """Return True when an error is worth retrying."""
    return bool(getattr(error, "transient", False))
