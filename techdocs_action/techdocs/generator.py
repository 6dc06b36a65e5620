"""Wrapper around `techdocs-cli generate`."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from ..config import DEFAULT_DOCKER_IMAGE
from ..errors import GenerationError
from ..logging import get_logger
from ..models import DocsSource


class TechdocsGenerator:
    """Turns a documentation source into a static site directory."""

    def __init__(
        self,
        output_dir: Path | str = "site",
        *,
        command: Sequence[str] = ("techdocs-cli",),
        docker_image: str = DEFAULT_DOCKER_IMAGE,
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.command = list(command)
        self.docker_image = docker_image
        self._runner = runner or self._default_runner
        self.logger = get_logger("generator")

    def generate(self, source: DocsSource) -> Path:
        """Generate the site for `source` and return the output directory."""
        args = self.build_args(source)
        self.logger.debug("Running %s", " ".join(args))
        try:
            self._runner(args)
        except FileNotFoundError as exc:
            raise GenerationError(
                f"Unable to locate '{self.command[0]}'. Install @techdocs/cli or set the techdocs-cli input."
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip()
            raise GenerationError(
                f"techdocs generate failed with exit code {exc.returncode}"
                + (f": {detail}" if detail else "")
            ) from exc
        except OSError as exc:
            raise GenerationError(f"Unable to run '{self.command[0]}': {exc.strerror or exc}") from exc
        return self.output_dir

    def build_args(self, source: DocsSource) -> List[str]:
        args = [
            *self.command,
            "generate",
            "--source-dir",
            str(source.source_dir),
            "--output-dir",
            str(self.output_dir),
            "--docker-image",
            self.docker_image,
        ]
        if source.techdocs_ref:
            args.extend(["--techdocs-ref", source.techdocs_ref])
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


__all__ = ["TechdocsGenerator"]
