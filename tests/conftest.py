"""Shared test fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a small single-page-app build directory.

    Layout:
        site/index.html    "A"
        site/app.js        "B"
        site/css/main.css
        site/img/logo.png
    """
    site = tmp_path / "site"
    site.mkdir()
    (site / "index.html").write_bytes(b"A")
    (site / "app.js").write_bytes(b"B")
    (site / "css").mkdir()
    (site / "css" / "main.css").write_bytes(b"body { color: red; }\n" * 20)
    (site / "img").mkdir()
    (site / "img" / "logo.png").write_bytes(bytes(range(256)))
    return site


@pytest.fixture
def bare_dir(tmp_path: Path) -> Path:
    """Create a build directory without an index document."""
    bare = tmp_path / "bare"
    bare.mkdir()
    (bare / "app.js").write_bytes(b"B")
    return bare
