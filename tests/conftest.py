"""
Shared test fixtures and configuration.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_go_mod(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes a go.mod into a temp directory."""

    def _make(content: str, *, mode: int = 0o644, dirname: str = "mod") -> Path:
        directory = tmp_path / dirname
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "go.mod"
        path.write_text(textwrap.dedent(content))
        path.chmod(mode)
        return path

    return _make
