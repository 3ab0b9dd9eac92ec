"""Tests for directory walking."""

import os
import sys
from pathlib import Path

import pytest

from staticpack.errors import GenerationError
from staticpack.walker import relative_url_path, walk


class TestWalk:
    """Tests for walk()."""

    def test__lists_every_file_once(self, site_dir: Path) -> None:
        """Every file appears exactly once with its root-relative path."""
        entries = walk(site_dir)

        paths = [entry.relative_path for entry in entries]
        assert sorted(paths) == [
            "/app.js",
            "/css/main.css",
            "/img/logo.png",
            "/index.html",
        ]
        assert len(set(paths)) == len(paths)

    def test__depth_first_lexicographic_order(self, tmp_path: Path) -> None:
        """Children are visited in name order, recursing into directories."""
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "z.txt").write_text("z")
        (tmp_path / "b" / "a.txt").write_text("a")
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "c.txt").write_text("c")

        paths = [entry.relative_path for entry in walk(tmp_path)]

        assert paths == ["/a.txt", "/b/a.txt", "/b/z.txt", "/c.txt"]

    def test__absolute_paths_point_to_files(self, site_dir: Path) -> None:
        """Absolute paths are the files on disk."""
        for entry in walk(site_dir):
            assert entry.absolute_path.is_file()
            assert entry.absolute_path == site_dir / entry.relative_path.lstrip("/")

    def test__repeated_walks_are_identical(self, site_dir: Path) -> None:
        """Walking unchanged input twice yields the same sequence."""
        assert walk(site_dir) == walk(site_dir)

    def test__empty_directory__returns_nothing(self, tmp_path: Path) -> None:
        """An empty root yields no entries."""
        assert walk(tmp_path) == []

    def test__missing_root__raises_generation_error(self, tmp_path: Path) -> None:
        """A root that is not a directory aborts generation."""
        with pytest.raises(GenerationError, match="Input directory not found"):
            walk(tmp_path / "missing")

    @pytest.mark.skipif(
        sys.platform == "win32" or os.geteuid() == 0,
        reason="Permission bits are not enforced",
    )
    def test__unlistable_directory__raises_generation_error(self, tmp_path: Path) -> None:
        """A directory that cannot be listed aborts generation."""
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "secret.txt").write_text("x")
        locked.chmod(0o000)
        try:
            with pytest.raises(GenerationError, match="Failed to list directory"):
                walk(tmp_path)
        finally:
            locked.chmod(0o755)


class TestRelativeUrlPath:
    """Tests for relative_url_path()."""

    def test__nested_file__uses_posix_separators(self, tmp_path: Path) -> None:
        """Nested paths get a leading slash and forward slashes."""
        path = tmp_path / "css" / "vendor" / "a.css"

        assert relative_url_path(tmp_path, path) == "/css/vendor/a.css"
