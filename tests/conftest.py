from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.catalog_builder import CatalogBuilder


@pytest.fixture
def catalog_builder(tmp_path: Path) -> CatalogBuilder:
    """Provide a reusable descriptor workspace rooted at the pytest tmp_path."""
    return CatalogBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_techdocs_logger():
    """Let records reach caplog even after the CLI configured its own handlers."""
    logger = logging.getLogger("techdocs")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
