"""TechDocs CLI adapters used by the publication pipeline."""

from .generator import TechdocsGenerator
from .publisher import TechdocsPublisher

__all__ = ["TechdocsGenerator", "TechdocsPublisher"]
