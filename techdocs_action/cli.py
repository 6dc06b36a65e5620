"""Action entrypoint: validate inputs, walk the catalog, publish TechDocs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping

from .catalog import CatalogWalker
from .config import FILE_MODE, ActionConfig, load_inputs
from .errors import DescriptorError, TechdocsActionError
from .logging import configure_logging, get_logger
from .pipeline import PublicationPipeline, PublicationReport
from .techdocs import TechdocsGenerator, TechdocsPublisher


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="techdocs-action",
        description="Generate Backstage TechDocs sites and publish them to cloud storage.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--cloud-storage",
        help="Storage driver (awsS3|googleGcs|azureBlobStorage|openStackSwift).",
    )
    parser.add_argument("--storage-name", help="Target bucket or container.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--publish-looking-path",
        help="Directory, relative to the workspace, scanned for entity descriptors.",
    )
    mode.add_argument(
        "--publish-looking-file",
        help="Root catalog file, relative to the workspace, expanded through Location entities.",
    )
    parser.add_argument("--workspace", help="Workspace root (defaults to GITHUB_WORKSPACE).")
    parser.add_argument("--output-dir", help="Directory, relative to the workspace, for generated sites.")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file.")
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Write prefixed log lines to stderr instead of workflow commands.",
    )
    return parser


def run(
    config: ActionConfig,
    *,
    walker: CatalogWalker | None = None,
    pipeline: PublicationPipeline | None = None,
) -> PublicationReport:
    """Run the action for an already loaded configuration."""
    config.storage.validate()
    mode = config.mode()

    walker = walker or CatalogWalker()
    if pipeline is None:
        generator = TechdocsGenerator(
            config.output_dir,
            command=config.techdocs_cli,
            docker_image=config.docker_image,
        )
        publisher = TechdocsPublisher(command=config.techdocs_cli)
        pipeline = PublicationPipeline(generator, publisher, config.storage)

    if mode == FILE_MODE:
        catalog = walker.walk_file(config.resolve(config.looking_file or ""))
    else:
        catalog = walker.walk_path(config.resolve(config.looking_path or ""))
    return pipeline.run(catalog)


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    """CLI entrypoint; inputs come from `INPUT_*` variables unless given as flags.

    Returns the process exit status: 0 on success, 1 on any fatal error.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    overrides = {
        "cloud-storage": args.cloud_storage,
        "storage-name": args.storage_name,
        "publish-looking-path": args.publish_looking_path,
        "publish-looking-file": args.publish_looking_file,
        "workspace": args.workspace,
        "output-dir": args.output_dir,
    }
    # a mode flag replaces whichever mode the environment selected
    if args.publish_looking_file:
        overrides["publish-looking-path"] = ""
    if args.publish_looking_path:
        overrides["publish-looking-file"] = ""

    config = load_inputs(environ, overrides)
    configure_logging(
        verbose=bool(args.verbose) or config.verbose,
        log_file=args.log_file,
        workflow_commands=not args.plain_logs,
    )
    logger = get_logger("cli")

    try:
        report = run(config)
    except DescriptorError as exc:
        logger.error("%s", exc, extra={"file": _relativize(exc.path, config.workspace)})
        return 1
    except TechdocsActionError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:  # pragma: no cover
        logger.error("techdocs action failed: %s", exc, exc_info=config.verbose)
        return 1

    logger.info(
        "Published %d entities, skipped %d descriptors",
        len(report.published),
        len(report.skipped),
    )
    return 0


def _relativize(path: Path, workspace: Path) -> str:
    try:
        return path.relative_to(workspace).as_posix()
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
