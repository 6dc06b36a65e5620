"""Error taxonomy shared by the techdocs action components."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class TechdocsActionError(RuntimeError):
    """Base class for every failure the action reports."""


class ConfigurationError(TechdocsActionError):
    """Raised when action inputs are invalid. Always fatal."""


class UnsupportedStorageError(ConfigurationError):
    """Raised when the selected cloud storage driver is unknown."""


class MissingCredentialError(ConfigurationError):
    """Raised when a storage driver lacks a mandatory credential field."""


class PublicationModeError(ConfigurationError):
    """Raised when neither a looking path nor a looking file is configured."""


class DescriptorError(TechdocsActionError):
    """Raised when a descriptor file cannot be turned into entities."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class UnsupportedFileTypeError(DescriptorError):
    """Raised for descriptor paths without a YAML extension."""


class MissingFieldError(DescriptorError):
    """Raised when a descriptor document misses required entity fields."""

    def __init__(self, message: str, path: Path | str, fields: Sequence[str]) -> None:
        super().__init__(message, path)
        self.fields = list(fields)


class DescriptorParseError(DescriptorError):
    """Raised when a descriptor is not valid YAML."""


class DescriptorNotFoundError(DescriptorError):
    """Raised when a descriptor path does not exist on disk."""


class UnsupportedReferenceTypeError(TechdocsActionError):
    """Raised for techdocs-ref annotations not using the dir or url scheme."""


class GenerationError(TechdocsActionError):
    """Raised when the documentation generator fails."""


class PublishError(TechdocsActionError):
    """Raised when uploading a generated site fails."""


__all__ = [
    "ConfigurationError",
    "DescriptorError",
    "DescriptorNotFoundError",
    "DescriptorParseError",
    "GenerationError",
    "MissingCredentialError",
    "MissingFieldError",
    "PublicationModeError",
    "PublishError",
    "TechdocsActionError",
    "UnsupportedFileTypeError",
    "UnsupportedReferenceTypeError",
    "UnsupportedStorageError",
]
