"""Helper utilities for constructing temporary mini-program projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from minicomp.config import BuildConfig, load_config
from minicomp.graph import BuildGraph


class ProjectBuilder:
    """Writes files into a throwaway project and builds configs and graphs for it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        (self.root / "src").mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def config(self, app_type: str | None = None) -> BuildConfig:
        return load_config(self.root, app_type=app_type)

    def graph(self, app_type: str | None = None) -> BuildGraph:
        return BuildGraph(self.config(app_type))

    def path(self, relative: str = "") -> Path:
        """Return an absolute path inside the project."""
        return (self.root / relative).resolve() if relative else self.root.resolve()


__all__ = ["ProjectBuilder"]
