"""Path prefix remapping for verifying files moved between roots."""

from dataclasses import dataclass
from pathlib import Path


def remap_path(original: Path, old_base: Path | None, new_base: Path | None) -> Path:
    """Replace ``old_base`` with ``new_base`` when it prefixes ``original``.

    Matching is component-wise, so ``/old`` prefixes ``/old/a`` but not
    ``/older/a``. Without both bases the path is returned unchanged.
    """
    if old_base is None or new_base is None:
        return original
    try:
        suffix = original.relative_to(old_base)
    except ValueError:
        return original
    return new_base / suffix


@dataclass(frozen=True)
class PathRemapper:
    """Remaps verification targets from one directory root to another."""

    old_base: Path | None = None
    new_base: Path | None = None

    @property
    def enabled(self) -> bool:
        return self.old_base is not None and self.new_base is not None

    def __call__(self, path: str | Path) -> Path:
        return remap_path(Path(path), self.old_base, self.new_base)
