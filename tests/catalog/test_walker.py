"""Tests for techdocs_action.catalog.walker."""

from __future__ import annotations

import logging

import pytest

from techdocs_action.catalog.walker import iter_descriptor_candidates
from techdocs_action.errors import ConfigurationError, MissingFieldError, UnsupportedFileTypeError
from techdocs_action.models import ErrorPolicy
from tests._fixtures.catalog_builder import CatalogBuilder, component

_LOCATION = """
kind: Location
metadata:
  name: root
  annotations:
    backstage.io/techdocs-ref: dir:.
spec:
{spec}
"""


def _location(spec: str) -> str:
    return _LOCATION.format(spec=spec)


def test_file_mode_expands_targets_in_order(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "catalog.yaml": _location("  targets: [a.yml, b.yml]"),
            "a.yml": component("a"),
            "b.yml": component("b"),
        }
    )

    catalog = catalog_builder.walk_file("catalog.yaml")

    assert catalog.policy is ErrorPolicy.STRICT
    assert catalog.paths == [
        catalog_builder.path("catalog.yaml"),
        catalog_builder.path("a.yml"),
        catalog_builder.path("b.yml"),
    ]
    assert [entity.name for entity in catalog.entities] == ["root", "a", "b"]


def test_file_mode_expands_single_target(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "catalog.yaml": _location("  target: c.yml"),
            "c.yml": component("c"),
        }
    )

    catalog = catalog_builder.walk_file("catalog.yaml")

    assert catalog.paths == [catalog_builder.path("catalog.yaml"), catalog_builder.path("c.yml")]


def test_frontier_is_breadth_first(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "catalog.yaml": _location("  targets: [teams/all.yaml, z.yml]"),
            "teams/all.yaml": _location("  targets: [x.yml]").replace("name: root", "name: teams"),
            "teams/x.yml": component("x"),
            "z.yml": component("z"),
        }
    )

    catalog = catalog_builder.walk_file("catalog.yaml")

    assert catalog.paths == [
        catalog_builder.path("catalog.yaml"),
        catalog_builder.path("teams/all.yaml"),
        catalog_builder.path("z.yml"),
        catalog_builder.path("teams/x.yml"),
    ]


def test_reference_cycles_terminate(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "catalog.yaml": _location("  target: other.yaml"),
            "other.yaml": _location("  target: ./catalog.yaml").replace("name: root", "name: other"),
        }
    )

    catalog = catalog_builder.walk_file("catalog.yaml")

    assert catalog.paths == [catalog_builder.path("catalog.yaml"), catalog_builder.path("other.yaml")]
    assert [entity.name for entity in catalog.entities] == ["root", "other"]


def test_file_mode_aborts_on_invalid_target(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "catalog.yaml": _location("  targets: [good.yml, bad.yml]"),
            "good.yml": component("good"),
            "bad.yml": "kind: Component\nmetadata:\n  name: bad\n",
        }
    )

    with pytest.raises(MissingFieldError) as excinfo:
        catalog_builder.walk_file("catalog.yaml")

    assert excinfo.value.path == catalog_builder.path("bad.yml")
    assert str(catalog_builder.path("bad.yml")) in str(excinfo.value)


def test_file_mode_rejects_non_yaml_catalog(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write({"catalog.json": "{}"})

    with pytest.raises(UnsupportedFileTypeError):
        catalog_builder.walk_file("catalog.json")


def test_path_mode_skips_invalid_files(catalog_builder: CatalogBuilder, caplog: pytest.LogCaptureFixture) -> None:
    catalog_builder.write(
        {
            "docs/README.md": "# readme\n",
            "svc/catalog-info.yaml": component("svc"),
            "broken.yaml": "kind: Component\n",
        }
    )
    caplog.set_level(logging.INFO, logger="techdocs")

    catalog = catalog_builder.walk_path()

    assert catalog.policy is ErrorPolicy.LENIENT
    assert [entity.name for entity in catalog.entities] == ["svc"]
    assert [path for path, _ in catalog.skipped] == [
        catalog_builder.path("broken.yaml"),
        catalog_builder.path("docs/README.md"),
    ]
    ignored = [record for record in caplog.records if record.getMessage().startswith("Ignoring")]
    assert len(ignored) == 2


def test_path_mode_does_not_read_location_targets_twice(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "a.yml": component("a"),
            "catalog.yaml": _location("  targets: [a.yml, missing.yml]"),
        }
    )

    catalog = catalog_builder.walk_path()

    assert [entity.name for entity in catalog.entities] == ["a", "root"]
    assert [path for path, _ in catalog.skipped] == [catalog_builder.path("missing.yml")]


def test_path_mode_requires_directory(catalog_builder: CatalogBuilder) -> None:
    with pytest.raises(ConfigurationError, match="not a directory"):
        catalog_builder.walk_path("nowhere")


def test_candidates_are_sorted_by_relative_path(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write({"b.yaml": "", "a/z.yaml": "", "a.yaml": ""})

    candidates = list(iter_descriptor_candidates(catalog_builder.path()))

    assert candidates == [
        catalog_builder.path("a.yaml"),
        catalog_builder.path("a/z.yaml"),
        catalog_builder.path("b.yaml"),
    ]


def test_path_mode_skips_unreadable_target_path(catalog_builder: CatalogBuilder) -> None:
    catalog_builder.write(
        {
            "a.yaml": component("a"),
            "catalog.yaml": _location('  target: "x\\0.yaml"'),
        }
    )

    catalog = catalog_builder.walk_path()

    assert [entity.name for entity in catalog.entities] == ["a", "root"]
    assert len(catalog.skipped) == 1
    assert "unable to read descriptor" in catalog.skipped[0][1]
