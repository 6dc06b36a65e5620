"""Discover descriptor files and expand Location entities breadth first."""

from __future__ import annotations

import os
from collections import deque
from pathlib import Path
from typing import Deque, Iterable, Iterator, List, Set

from ..errors import ConfigurationError, DescriptorError
from ..logging import get_logger
from ..models import Catalog, ErrorPolicy
from .descriptors import DescriptorReader


def iter_descriptor_candidates(root: Path) -> Iterator[Path]:
    """Yield every regular file under `root`, ordered by relative POSIX path."""
    found: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        for filename in filenames:
            candidate = current_dir / filename
            if candidate.is_file():
                found.append(candidate)
    yield from sorted(found, key=lambda path: path.relative_to(root).as_posix())


class CatalogWalker:
    """Builds the ordered entity list for Path and File publication modes."""

    def __init__(self, reader: DescriptorReader | None = None) -> None:
        self.reader = reader or DescriptorReader()
        self.logger = get_logger("walker")

    def walk_path(self, root: Path | str) -> Catalog:
        """Treat every file under `root` as a candidate descriptor, skipping failures."""
        root_path = Path(root)
        if not root_path.is_dir():
            raise ConfigurationError(f"publish looking path is not a directory: {root_path}")
        self.logger.info("Looking for entity descriptors under %s", root_path)
        return self.walk(iter_descriptor_candidates(root_path), ErrorPolicy.LENIENT)

    def walk_file(self, catalog_path: Path | str) -> Catalog:
        """Expand a root catalog file; any failure aborts the walk."""
        self.logger.info("Expanding catalog file %s", catalog_path)
        return self.walk([Path(catalog_path)], ErrorPolicy.STRICT)

    def walk(self, seeds: Iterable[Path], policy: ErrorPolicy) -> Catalog:
        """Read the frontier in discovery order.

        Location targets go to the back of the queue. Each resolved path is
        read at most once, so reference cycles terminate.
        """
        catalog = Catalog(policy=policy)
        frontier: Deque[Path] = deque()
        visited: Set[Path] = set()
        for seed in seeds:
            self._enqueue(frontier, visited, seed)

        while frontier:
            path = frontier.popleft()
            catalog.paths.append(path)
            try:
                contents = self.reader.read_all(path)
            except DescriptorError as exc:
                if policy is ErrorPolicy.STRICT:
                    raise
                self.logger.info("Ignoring %s", exc)
                catalog.skipped.append((path, str(exc)))
                continue

            catalog.entities.extend(contents.entities)
            for target in contents.targets:
                self._enqueue(frontier, visited, target)

        self.logger.info(
            "Discovered %d entities in %d descriptors (%d skipped)",
            len(catalog.entities),
            len(catalog.paths),
            len(catalog.skipped),
        )
        return catalog

    def _enqueue(self, frontier: Deque[Path], visited: Set[Path], path: Path) -> None:
        key = Path(os.path.abspath(path))
        if key in visited:
            self.logger.debug("Already queued %s", path)
            return
        visited.add(key)
        frontier.append(path)


__all__ = ["CatalogWalker", "iter_descriptor_candidates"]
