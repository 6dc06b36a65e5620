"""Generate-then-publish orchestration for discovered entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Protocol, Sequence, Tuple

from .logging import get_logger
from .models import Catalog, DocsSource, Entity, ErrorPolicy
from .storage import StorageConfig


class Generator(Protocol):
    """Builds a static site for a documentation source."""

    def generate(self, source: DocsSource) -> Path:
        """Return the directory holding the generated site."""


class Publisher(Protocol):
    """Uploads a generated site to cloud storage."""

    def publish(self, site_dir: Path, entity_key: str, storage: StorageConfig) -> None:
        """Publish the site under the entity key."""


@dataclass
class PublicationReport:
    """Result of a publication run."""

    published: List[str] = field(default_factory=list)
    skipped: List[Tuple[Path, str]] = field(default_factory=list)


class PublicationPipeline:
    """Drives generation and publication for each entity in discovery order."""

    def __init__(self, generator: Generator, publisher: Publisher, storage: StorageConfig) -> None:
        self.generator = generator
        self.publisher = publisher
        self.storage = storage
        self.logger = get_logger("pipeline")

    def run(self, catalog: Catalog) -> PublicationReport:
        published = self.publish_all(catalog.entities, catalog.policy)
        return PublicationReport(published=published, skipped=list(catalog.skipped))

    def publish_all(
        self, entities: Sequence[Entity], policy: ErrorPolicy = ErrorPolicy.STRICT
    ) -> List[str]:
        """Generate then publish every entity, one at a time.

        Discovery failures were settled by the walker under `policy`; any
        error raised here (unsupported reference, generation, publication)
        aborts the run whatever the policy.
        """
        self.logger.info("Publishing %d entities (%s mode)", len(entities), policy.value)
        published: List[str] = []
        for entity in entities:
            source = entity.docs_source()
            self.logger.info("Generating docs for %s", entity.key)
            site_dir = self.generator.generate(source)
            self.logger.info("Publishing %s to %s", entity.key, self.storage.driver)
            self.publisher.publish(site_dir, entity.key, self.storage)
            published.append(entity.key)
        return published


__all__ = ["Generator", "PublicationPipeline", "PublicationReport", "Publisher"]
