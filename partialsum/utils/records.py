"""Checksum record line format: ``"<hex-digest>  <path>"``.

The two fields are separated by exactly two spaces. Paths may contain single
spaces, but a path containing a double space before the real separator is
ambiguous in this format; the first double space always wins. This matches
files written by earlier versions and is kept as-is for compatibility.
"""

from partialsum.core.exceptions import MalformedRecordLineError

RECORD_SEPARATOR = "  "


def parse_record_line(line: str) -> tuple[str, str] | None:
    """Split a record line into ``(digest, path)``.

    Returns:
        The two fields, or None when the line has no two-space separator
    """
    idx = line.find(RECORD_SEPARATOR)
    if idx < 0:
        return None
    return line[:idx], line[idx + len(RECORD_SEPARATOR) :]


def parse_record_line_strict(line: str) -> tuple[str, str]:
    """Like parse_record_line but raises MalformedRecordLineError."""
    parsed = parse_record_line(line)
    if parsed is None:
        raise MalformedRecordLineError(line)
    return parsed


def format_record_line(digest: str, path: str) -> str:
    return f"{digest}{RECORD_SEPARATOR}{path}"


def iter_check_lines(text: str) -> list[str]:
    """Return the non-blank, whitespace-trimmed lines of a checksum file."""
    return [line.strip() for line in text.splitlines() if line.strip()]
