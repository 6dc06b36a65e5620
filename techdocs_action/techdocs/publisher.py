"""Wrapper around `techdocs-cli publish`."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from ..config import as_bool
from ..errors import PublishError
from ..logging import get_logger
from ..storage import StorageConfig, is_switch


class TechdocsPublisher:
    """Uploads a generated site to the configured cloud storage."""

    def __init__(
        self,
        *,
        command: Sequence[str] = ("techdocs-cli",),
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.command = list(command)
        self._runner = runner or self._default_runner
        self.logger = get_logger("publisher")

    def publish(self, site_dir: Path | str, entity_key: str, storage: StorageConfig) -> None:
        """Publish `site_dir` under the `namespace/kind/name` prefix."""
        args = self.build_args(site_dir, entity_key, storage)
        self.logger.debug(
            "Publishing %s to %s storage %s", entity_key, storage.driver, storage.storage_name
        )
        try:
            self._runner(args)
        except FileNotFoundError as exc:
            raise PublishError(
                f"Unable to locate '{self.command[0]}'. Install @techdocs/cli or set the techdocs-cli input."
            ) from exc
        except subprocess.CalledProcessError as exc:
            # stderr may echo credentials
            raise PublishError(
                f"techdocs publish of {entity_key} failed with exit code {exc.returncode}"
            ) from exc
        except OSError as exc:
            raise PublishError(f"Unable to run '{self.command[0]}': {exc.strerror or exc}") from exc

    def build_args(self, site_dir: Path | str, entity_key: str, storage: StorageConfig) -> List[str]:
        args = [
            *self.command,
            "publish",
            "--publisher-type",
            storage.driver,
            "--storage-name",
            storage.storage_name,
            "--entity",
            entity_key,
            "--directory",
            str(site_dir),
        ]
        options = storage.active_options
        for flag, value in storage.publisher_options().items():
            if options is not None and is_switch(options, flag):
                if as_bool(value):
                    args.append(f"--{flag}")
                continue
            args.extend([f"--{flag}", value])
        return args

    @staticmethod
    def _default_runner(args: Iterable[str]) -> str:
        completed = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["TechdocsPublisher"]
