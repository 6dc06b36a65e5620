"""Helper utilities for constructing temporary descriptor trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from techdocs_action.catalog import CatalogWalker
from techdocs_action.models import Catalog


class CatalogBuilder:
    """Utility for writing descriptor files into a throwaway workspace and walking it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "workspace"
        self.root.mkdir()
        self._walker = CatalogWalker()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the workspace."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def walk_path(self, relative: str = ".") -> Catalog:
        return self._walker.walk_path(self.root / relative)

    def walk_file(self, relative: str) -> Catalog:
        return self._walker.walk_file(self.root / relative)

    def path(self, relative: str = ".") -> Path:
        """Return a path inside the workspace."""
        return self.root / relative


def component(name: str, *, ref: str = "dir:.", namespace: str | None = None, kind: str = "Component") -> str:
    """Return a minimal entity descriptor document."""
    namespace_line = f"\n  namespace: {namespace}" if namespace else ""
    return (
        f"kind: {kind}\n"
        f"metadata:\n"
        f"  name: {name}{namespace_line}\n"
        f"  annotations:\n"
        f"    backstage.io/techdocs-ref: {ref}\n"
    )


__all__ = ["CatalogBuilder", "component"]
