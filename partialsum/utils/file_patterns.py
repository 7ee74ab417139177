"""File discovery for generate mode.

# FILE_CONTEXT: Expands user-supplied paths into a flat list of files
# ROLE: Walks directories with os.walk, pruning excluded subtrees early
# ORDERING: Names are sorted per directory so output order is stable
"""

import os
import re
from fnmatch import translate
from pathlib import Path
from typing import Iterable, Pattern

from loguru import logger


def _matcher(pattern: str, cache: dict[str, Pattern[str]]) -> Pattern[str]:
    if pattern not in cache:
        cache[pattern] = re.compile(translate(pattern))
    return cache[pattern]


def should_exclude_path(
    path: Path,
    base_dir: Path,
    patterns: list[str],
    cache: dict[str, Pattern[str]],
) -> bool:
    """Whether ``path`` matches any of the ``--exclude`` patterns.

    ``**/name/**`` excludes every path with a component called ``name``.
    Other patterns are fnmatch globs tried against both the file name and
    the path relative to ``base_dir``; a leading ``**/`` is optional.
    """
    try:
        rel_path = path.relative_to(base_dir)
    except ValueError:
        rel_path = path

    for pattern in patterns:
        if pattern.startswith("**/") and pattern.endswith("/**"):
            if pattern[3:-3] in rel_path.parts:
                return True
            continue
        matcher = _matcher(pattern.removeprefix("**/"), cache)
        if matcher.match(path.name) or matcher.match(rel_path.as_posix()):
            return True
    return False


def walk_directory_tree(
    root_directory: Path,
    exclude_patterns: list[str],
    follow_links: bool = False,
) -> list[Path]:
    """Collect regular files below ``root_directory``.

    Excluded directories are removed from the walk before being descended
    into. Directories that vanish or cannot be listed are logged and skipped.
    """
    files: list[Path] = []
    pattern_cache: dict[str, Pattern[str]] = {}

    def _on_error(e: OSError) -> None:
        logger.warning(f"Error accessing directory {e.filename}: {e.strerror}")

    for dirpath, dirnames, filenames in os.walk(
        root_directory, topdown=True, onerror=_on_error, followlinks=follow_links
    ):
        current_dir = Path(dirpath)

        # Prune in place (topdown=True) so excluded subtrees are never walked
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not should_exclude_path(
                current_dir / d, root_directory, exclude_patterns, pattern_cache
            )
        )

        for filename in sorted(filenames):
            file_path = current_dir / filename
            if should_exclude_path(
                file_path, root_directory, exclude_patterns, pattern_cache
            ):
                continue
            # Skip sockets, fifos, devices and symlinks to directories
            if not file_path.is_file():
                continue
            if file_path.is_symlink() and not follow_links:
                continue
            files.append(file_path)

    return files


def discover_files(
    paths: Iterable[Path | str],
    exclude_patterns: list[str] | None = None,
    follow_links: bool = False,
) -> list[Path]:
    """Expand files and directories into a flat, ordered list of files.

    Each input is made absolute and canonical when possible; inputs that
    cannot be resolved are used as given.
    """
    exclude_patterns = exclude_patterns or []
    files: list[Path] = []

    for raw in paths:
        path = Path(raw)
        try:
            path = path.resolve(strict=True)
        except (OSError, RuntimeError):
            pass

        if path.is_dir():
            files.extend(walk_directory_tree(path, exclude_patterns, follow_links))
        elif path.is_file():
            files.append(path)
        else:
            logger.warning(f"Skipping '{path}': not a file or directory")

    return files
