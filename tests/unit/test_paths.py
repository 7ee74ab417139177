"""Unit tests for path prefix remapping."""

from pathlib import Path

from partialsum.utils.paths import PathRemapper, remap_path


def test_remap_under_old_base():
    assert remap_path(Path("/old/sub/f.txt"), Path("/old"), Path("/new")) == Path(
        "/new/sub/f.txt"
    )


def test_remap_outside_old_base_unchanged():
    assert remap_path(Path("/other/f.txt"), Path("/old"), Path("/new")) == Path(
        "/other/f.txt"
    )


def test_remap_matches_whole_components():
    assert remap_path(Path("/older/f.txt"), Path("/old"), Path("/new")) == Path(
        "/older/f.txt"
    )


def test_remap_requires_both_bases():
    path = Path("/old/f.txt")
    assert remap_path(path, None, Path("/new")) == path
    assert remap_path(path, Path("/old"), None) == path


def test_remapper_callable():
    remapper = PathRemapper(Path("/mnt/a"), Path("/mnt/b"))
    assert remapper.enabled
    assert remapper("/mnt/a/x/y.bin") == Path("/mnt/b/x/y.bin")


def test_remapper_disabled_by_default():
    remapper = PathRemapper()
    assert not remapper.enabled
    assert remapper("/mnt/a/x") == Path("/mnt/a/x")
