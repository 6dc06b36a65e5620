"""Descriptor reading and catalog traversal."""

from .descriptors import DescriptorContents, DescriptorReader, location_targets, validate_entity
from .walker import CatalogWalker, iter_descriptor_candidates

__all__ = [
    "CatalogWalker",
    "DescriptorContents",
    "DescriptorReader",
    "iter_descriptor_candidates",
    "location_targets",
    "validate_entity",
]
