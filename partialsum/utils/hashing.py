"""Partial file sampling and digest computation.

# FILE_CONTEXT: The hashing core shared by generate and verify
# ROLE: Reads three byte windows plus metadata and folds them into SHA-256
# COMPATIBILITY: The fold order below is the on-disk contract for saved
#   checksum files and must not change:
#     mod_time (u64 LE) | size (u64 LE) | first | middle | last
"""

import hashlib
import os
import struct
from dataclasses import dataclass
from pathlib import Path

from partialsum.core.exceptions import (
    ErrorStage,
    MetadataError,
    OpenError,
    ReadError,
    SeekError,
)

DEFAULT_PARTIAL_BYTES = 100

_U64_LE = struct.Struct("<Q")


@dataclass(frozen=True)
class FileSample:
    """Metadata and sampled windows of a single file."""

    size: int
    mod_time_secs: int
    first: bytes
    middle: bytes
    last: bytes


def _read_window(f, partial_bytes: int, path: Path, stage: ErrorStage) -> bytes:
    try:
        return f.read(partial_bytes)
    except OSError as e:
        raise ReadError(path, stage, str(e)) from e


def _seek(f, offset: int, path: Path, stage: ErrorStage) -> None:
    try:
        f.seek(offset)
    except OSError as e:
        raise SeekError(path, stage, str(e)) from e


def sample_file(
    path: Path, partial_bytes: int = DEFAULT_PARTIAL_BYTES, include_modtime: bool = False
) -> FileSample:
    """Read size, optional mtime and the first/middle/last windows of a file.

    Args:
        path: File to sample
        partial_bytes: Size of each sampled window
        include_modtime: Whether to record the modification time. When False
            the time is always 0 so copies without preserved timestamps match.

    Returns:
        FileSample for the file

    Raises:
        MetadataError: stat() failed
        OpenError: the file could not be opened
        ReadError: a window read failed (transient)
        SeekError: a seek failed (transient)
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise MetadataError(path, str(e)) from e

    size = st.st_size
    # Whole seconds since the epoch; pre-epoch times collapse to 0
    mod_time_secs = max(0, st.st_mtime_ns // 1_000_000_000) if include_modtime else 0

    try:
        f = open(path, "rb")
    except OSError as e:
        raise OpenError(path, str(e)) from e

    with f:
        first = _read_window(f, partial_bytes, path, ErrorStage.READ_FIRST)

        middle = b""
        if size > 2 * partial_bytes:
            _seek(f, size // 2, path, ErrorStage.SEEK_MIDDLE)
            middle = _read_window(f, partial_bytes, path, ErrorStage.READ_MIDDLE)

        # First and last windows may overlap when size < 2 * partial_bytes
        last = b""
        if size > partial_bytes:
            _seek(f, max(0, size - partial_bytes), path, ErrorStage.SEEK_LAST)
            last = _read_window(f, partial_bytes, path, ErrorStage.READ_LAST)

    return FileSample(
        size=size,
        mod_time_secs=mod_time_secs,
        first=first,
        middle=middle,
        last=last,
    )


def combine_digest(sample: FileSample) -> str:
    """Fold a FileSample into a lowercase hex SHA-256 digest."""
    h = hashlib.sha256()
    h.update(_U64_LE.pack(sample.mod_time_secs))
    h.update(_U64_LE.pack(sample.size))
    h.update(sample.first)
    h.update(sample.middle)
    h.update(sample.last)
    return h.hexdigest()


def partial_file_hash(
    path: Path, partial_bytes: int = DEFAULT_PARTIAL_BYTES, include_modtime: bool = False
) -> str:
    """Compute the partial checksum of a file with a single attempt."""
    return combine_digest(sample_file(path, partial_bytes, include_modtime))
