"""Cloud storage selection and credential validation."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, Mapping, Optional, Tuple, Union

from .errors import MissingCredentialError, UnsupportedStorageError

AWS_S3 = "awsS3"
GOOGLE_GCS = "googleGcs"
AZURE_BLOB_STORAGE = "azureBlobStorage"
OPENSTACK_SWIFT = "openStackSwift"

SUPPORTED_DRIVERS: Tuple[str, ...] = (AWS_S3, GOOGLE_GCS, AZURE_BLOB_STORAGE, OPENSTACK_SWIFT)


@dataclass(frozen=True)
class AwsS3Options:
    """Optional settings for the awsS3 publisher."""

    aws_role_arn: str = field(default="", metadata={"flag": "awsRoleArn", "input": "aws-role-arn"})
    aws_endpoint: str = field(default="", metadata={"flag": "awsEndpoint", "input": "aws-endpoint"})
    aws_s3_sse: str = field(default="", metadata={"flag": "awsS3sse", "input": "awsS3-sse"})
    aws_s3_force_path_style: str = field(
        default="",
        metadata={"flag": "awsS3ForcePathStyle", "input": "awsS3-force-path-style", "switch": True},
    )


@dataclass(frozen=True)
class GoogleGcsOptions:
    """Optional settings for the googleGcs publisher."""

    gcs_bucket_root_path: str = field(
        default="", metadata={"flag": "gcsBucketRootPath", "input": "gcs-bucket-root-path"}
    )


@dataclass(frozen=True)
class AzureBlobStorageOptions:
    """Settings for the azureBlobStorage publisher; the account name is mandatory."""

    azure_account_name: str = field(
        default="", metadata={"flag": "azureAccountName", "input": "azure-account-name"}
    )
    azure_account_key: str = field(
        default="", metadata={"flag": "azureAccountKey", "input": "azure-account-key"}
    )


@dataclass(frozen=True)
class OpenStackSwiftOptions:
    """Settings for the openStackSwift publisher; every field is mandatory."""

    os_credential_id: str = field(default="", metadata={"flag": "osCredentialId", "input": "os-credential-id"})
    os_secret: str = field(default="", metadata={"flag": "osSecret", "input": "os-secret"})
    os_auth_url: str = field(default="", metadata={"flag": "osAuthUrl", "input": "os-auth-url"})
    os_swift_url: str = field(default="", metadata={"flag": "osSwiftUrl", "input": "os-swift-url"})


DriverOptions = Union[AwsS3Options, GoogleGcsOptions, AzureBlobStorageOptions, OpenStackSwiftOptions]

OPTION_TYPES: Dict[str, type] = {
    AWS_S3: AwsS3Options,
    GOOGLE_GCS: GoogleGcsOptions,
    AZURE_BLOB_STORAGE: AzureBlobStorageOptions,
    OPENSTACK_SWIFT: OpenStackSwiftOptions,
}


@dataclass(frozen=True)
class StorageConfig:
    """Selected storage driver plus the credential groups for every driver."""

    driver: str
    storage_name: str = ""
    aws_s3: AwsS3Options = field(default_factory=AwsS3Options)
    google_gcs: GoogleGcsOptions = field(default_factory=GoogleGcsOptions)
    azure_blob_storage: AzureBlobStorageOptions = field(default_factory=AzureBlobStorageOptions)
    openstack_swift: OpenStackSwiftOptions = field(default_factory=OpenStackSwiftOptions)

    def options_for(self, driver: str) -> Optional[DriverOptions]:
        return {
            AWS_S3: self.aws_s3,
            GOOGLE_GCS: self.google_gcs,
            AZURE_BLOB_STORAGE: self.azure_blob_storage,
            OPENSTACK_SWIFT: self.openstack_swift,
        }.get(driver)

    @property
    def active_options(self) -> Optional[DriverOptions]:
        return self.options_for(self.driver)

    def validate(self) -> None:
        validate_storage(self.driver, self.active_options)

    def publisher_options(self) -> Dict[str, str]:
        """Return the active driver's non-empty fields keyed by CLI flag name."""
        options = self.active_options
        if options is None:
            return {}
        return {flag: value for flag, value in option_items(options).items() if value}


def option_items(options: DriverOptions) -> Dict[str, str]:
    """Map each option field's CLI flag name to its value."""
    return {item.metadata["flag"]: getattr(options, item.name) for item in fields(options)}


def is_switch(options: DriverOptions, flag: str) -> bool:
    return any(item.metadata["flag"] == flag and item.metadata.get("switch") for item in fields(options))


def validate_storage(driver: str, options: Optional[DriverOptions | Mapping[str, str]]) -> None:
    """Check the storage selection before any entity is processed.

    Raises `UnsupportedStorageError` for unknown drivers and
    `MissingCredentialError` when azureBlobStorage lacks an account name or
    any openStackSwift field is empty. awsS3 and googleGcs carry no
    mandatory fields.
    """
    if driver not in SUPPORTED_DRIVERS:
        raise UnsupportedStorageError(
            "cloud storage not supported. Supported cloud storages: ("
            + "|".join(SUPPORTED_DRIVERS)
            + ")"
        )

    values = _as_values(options)

    if driver == AZURE_BLOB_STORAGE and not values.get("azureAccountName"):
        raise MissingCredentialError("cloud storage azureBlobStorage require azure-account-name")

    if driver == OPENSTACK_SWIFT:
        expected = [item.metadata["flag"] for item in fields(OpenStackSwiftOptions)]
        missing = [flag for flag in expected if not values.get(flag)]
        if missing:
            raise MissingCredentialError(
                "missing fields to call cloud storage openStackSwift: " + ", ".join(missing)
            )


def _as_values(options: Optional[DriverOptions | Mapping[str, str]]) -> Dict[str, str]:
    if options is None:
        return {}
    if isinstance(options, Mapping):
        return {str(key): str(value) if value is not None else "" for key, value in options.items()}
    return option_items(options)


__all__ = [
    "AWS_S3",
    "AZURE_BLOB_STORAGE",
    "AwsS3Options",
    "AzureBlobStorageOptions",
    "GOOGLE_GCS",
    "GoogleGcsOptions",
    "OPENSTACK_SWIFT",
    "OPTION_TYPES",
    "OpenStackSwiftOptions",
    "SUPPORTED_DRIVERS",
    "StorageConfig",
    "is_switch",
    "option_items",
    "validate_storage",
]
