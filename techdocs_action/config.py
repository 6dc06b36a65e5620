"""Action input loading for techdocs-action."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import PublicationModeError
from .storage import OPTION_TYPES, StorageConfig

DEFAULT_TECHDOCS_CLI = ("techdocs-cli",)
DEFAULT_DOCKER_IMAGE = "spotify/techdocs:v1.1.0"
DEFAULT_OUTPUT_DIR = "site"

PATH_MODE = "path"
FILE_MODE = "file"


@dataclass
class ActionConfig:
    """Represents the settings the workflow passes to the action."""

    storage: StorageConfig
    workspace: Path
    looking_path: Optional[str] = None
    looking_file: Optional[str] = None
    output_dir: Optional[Path] = None
    techdocs_cli: List[str] = field(default_factory=lambda: list(DEFAULT_TECHDOCS_CLI))
    docker_image: str = DEFAULT_DOCKER_IMAGE
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.output_dir is None:
            self.output_dir = self.workspace / DEFAULT_OUTPUT_DIR

    def mode(self) -> str:
        """Return the publication mode; the looking path wins when both are set."""
        if self.looking_path:
            return PATH_MODE
        if self.looking_file:
            return FILE_MODE
        raise PublicationModeError("error no publication type was specified")

    def resolve(self, relative: str) -> Path:
        return self.workspace / relative


def input_env_name(name: str) -> str:
    """Environment variable the Actions runner exports for an input."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(environ: Mapping[str, str], name: str) -> str:
    return environ.get(input_env_name(name), "").strip()


def load_inputs(
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ActionConfig:
    """Build the action configuration from `INPUT_*` variables.

    `overrides` maps input names to values that replace the environment,
    which is how command line flags take precedence.
    """
    env = dict(os.environ if environ is None else environ)
    for name, value in (overrides or {}).items():
        if value is not None:
            env[input_env_name(name)] = str(value)

    workspace = Path(
        get_input(env, "workspace") or env.get("GITHUB_WORKSPACE") or os.getcwd()
    ).expanduser()

    storage = StorageConfig(
        driver=get_input(env, "cloud-storage"),
        storage_name=get_input(env, "storage-name"),
        **_load_driver_options(env),
    )

    output_dir_str = get_input(env, "output-dir")
    output_dir = workspace / output_dir_str if output_dir_str else None

    cli_str = get_input(env, "techdocs-cli")
    techdocs_cli = shlex.split(cli_str) if cli_str else list(DEFAULT_TECHDOCS_CLI)

    verbose = bool(as_bool(get_input(env, "verbose"))) or bool(as_bool(env.get("ACTIONS_STEP_DEBUG")))

    return ActionConfig(
        storage=storage,
        workspace=workspace,
        looking_path=get_input(env, "publish-looking-path") or None,
        looking_file=get_input(env, "publish-looking-file") or None,
        output_dir=output_dir,
        techdocs_cli=techdocs_cli,
        docker_image=get_input(env, "docker-image") or DEFAULT_DOCKER_IMAGE,
        verbose=verbose,
    )


def _load_driver_options(env: Mapping[str, str]) -> Dict[str, Any]:
    attributes = {
        "awsS3": "aws_s3",
        "googleGcs": "google_gcs",
        "azureBlobStorage": "azure_blob_storage",
        "openStackSwift": "openstack_swift",
    }
    loaded: Dict[str, Any] = {}
    for driver, option_type in OPTION_TYPES.items():
        values = {item.name: get_input(env, item.metadata["input"]) for item in fields(option_type)}
        loaded[attributes[driver]] = option_type(**values)
    return loaded


def as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["ActionConfig", "FILE_MODE", "as_bool", "PATH_MODE", "get_input", "input_env_name", "load_inputs"]
