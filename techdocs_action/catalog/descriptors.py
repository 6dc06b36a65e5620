"""Parse Backstage entity descriptor files into validated entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

import yaml

from ..errors import (
    DescriptorNotFoundError,
    DescriptorParseError,
    MissingFieldError,
    UnsupportedFileTypeError,
)
from ..logging import get_logger
from ..models import DEFAULT_NAMESPACE, TECHDOCS_REF_ANNOTATION, Entity

YAML_SUFFIXES = (".yml", ".yaml")
LOCATION_KIND = "Location"

_logger = get_logger("descriptors")


@dataclass
class DescriptorContents:
    """Entities read from one descriptor plus the Location targets it points at."""

    path: Path
    entities: List[Entity] = field(default_factory=list)
    targets: List[Path] = field(default_factory=list)


def is_yaml_path(path: Path) -> bool:
    return path.suffix in YAML_SUFFIXES


def validate_entity(raw: Any) -> List[str]:
    """Return the dotted names of required fields missing from a raw document."""
    if not isinstance(raw, Mapping):
        return ["kind", "metadata.name", f"metadata.annotations.{TECHDOCS_REF_ANNOTATION}"]

    metadata = raw.get("metadata")
    metadata = metadata if isinstance(metadata, Mapping) else {}
    annotations = metadata.get("annotations")
    annotations = annotations if isinstance(annotations, Mapping) else {}

    missing = []
    if not _present(raw.get("kind")):
        missing.append("kind")
    if not _present(metadata.get("name")):
        missing.append("metadata.name")
    if not _present(annotations.get(TECHDOCS_REF_ANNOTATION)):
        missing.append(f"metadata.annotations.{TECHDOCS_REF_ANNOTATION}")
    return missing


def location_targets(raw: Mapping[str, Any], path: Path) -> List[Path]:
    """Return descriptor paths a Location entity references.

    Every `spec.targets` entry comes first in listed order, followed by
    `spec.target`. Targets resolve against the Location descriptor's directory.
    """
    if raw.get("kind") != LOCATION_KIND:
        return []
    spec = raw.get("spec")
    if not isinstance(spec, Mapping):
        return []

    base = path.parent
    targets: List[Path] = []
    listed = spec.get("targets")
    if isinstance(listed, list):
        targets.extend(base / str(target) for target in listed if _present(target))
    single = spec.get("target")
    if _present(single):
        targets.append(base / str(single))
    return targets


class DescriptorReader:
    """Reads descriptor files, validating every document they contain."""

    def read_one(self, path: Path | str) -> Entity:
        """Read a single-document descriptor and return its entity."""
        descriptor = Path(path)
        document = self._load(descriptor, multi=False)
        documents = [] if document is None else [document]
        entities = self._build(descriptor, documents)
        if not entities:
            raise MissingFieldError(
                f"{descriptor}: descriptor holds no entity",
                descriptor,
                validate_entity(None),
            )
        return entities[0]

    def read_all(self, path: Path | str) -> DescriptorContents:
        """Read every document of a descriptor stream.

        One invalid document fails the whole file; nothing is yielded for it.
        """
        descriptor = Path(path)
        documents = [doc for doc in self._load(descriptor, multi=True) if doc is not None]
        contents = DescriptorContents(path=descriptor, entities=self._build(descriptor, documents))
        for document in documents:
            contents.targets.extend(location_targets(document, descriptor))
        _logger.debug(
            "Read %d entities and %d location targets from %s",
            len(contents.entities),
            len(contents.targets),
            descriptor,
        )
        return contents

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _load(path: Path, *, multi: bool) -> Any:
        if not is_yaml_path(path):
            raise UnsupportedFileTypeError(f"{path}: file isn't a yaml type", path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DescriptorNotFoundError(f"{path}: descriptor file not found", path) from exc
        except (OSError, ValueError) as exc:
            raise DescriptorParseError(f"{path}: unable to read descriptor: {exc}", path) from exc
        try:
            if multi:
                return list(yaml.safe_load_all(text))
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DescriptorParseError(f"{path}: invalid YAML: {exc}", path) from exc

    @staticmethod
    def _build(path: Path, documents: List[Any]) -> List[Entity]:
        entities: List[Entity] = []
        for document in documents:
            missing = validate_entity(document)
            if missing:
                raise MissingFieldError(
                    f"{path}: necessary fields are missing ({', '.join(missing)})",
                    path,
                    missing,
                )
            metadata = document["metadata"]
            namespace = metadata.get("namespace")
            entities.append(
                Entity(
                    name=str(metadata["name"]),
                    kind=str(document["kind"]),
                    techdocs_ref=str(metadata["annotations"][TECHDOCS_REF_ANNOTATION]),
                    path=path.parent,
                    namespace=str(namespace) if _present(namespace) else DEFAULT_NAMESPACE,
                )
            )
        return entities


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


__all__ = [
    "DescriptorContents",
    "DescriptorReader",
    "LOCATION_KIND",
    "YAML_SUFFIXES",
    "is_yaml_path",
    "location_targets",
    "validate_entity",
]
