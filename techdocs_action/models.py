"""Core data models shared across techdocs action components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import UnsupportedReferenceTypeError

DEFAULT_NAMESPACE = "default"
TECHDOCS_REF_ANNOTATION = "backstage.io/techdocs-ref"


class ErrorPolicy(str, Enum):
    """How discovery and validation failures are treated during a walk."""

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class DocsSource:
    """Generator input resolved from an entity's techdocs-ref annotation."""

    source_dir: Path
    techdocs_ref: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return self.techdocs_ref is not None


@dataclass(frozen=True)
class Entity:
    """A validated Backstage entity that can be published to TechDocs."""

    name: str
    kind: str
    techdocs_ref: str
    path: Path
    namespace: str = DEFAULT_NAMESPACE

    @property
    def key(self) -> str:
        """Entity triplet used as the storage prefix, `namespace/kind/name`."""
        return f"{self.namespace}/{self.kind}/{self.name}"

    def docs_source(self) -> DocsSource:
        """Resolve where the generator should read documentation from.

        `dir:` references are relative to the directory holding the
        descriptor; `url:` references are handed to the generator verbatim.
        """
        scheme, _, target = self.techdocs_ref.partition(":")
        if scheme == "dir":
            return DocsSource(source_dir=self.path / target)
        if scheme == "url":
            return DocsSource(source_dir=Path("."), techdocs_ref=self.techdocs_ref)
        raise UnsupportedReferenceTypeError(
            f"{self.key}: unsupported techdocs reference annotation type '{scheme}'"
        )


@dataclass
class Catalog:
    """Ordered result of walking descriptor files."""

    policy: ErrorPolicy
    paths: List[Path] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    skipped: List[Tuple[Path, str]] = field(default_factory=list)
