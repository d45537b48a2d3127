"""Unit tests for the in-memory CatalogStore."""
from __future__ import annotations

import pytest

from src.service_catalog.services.catalog_store import (
    CatalogStore,
    bump_version,
    parse_service_input,
)
from src.shared.errors import (
    ConflictError,
    MetadataProvidedError,
    NameMismatchError,
    NotFoundError,
    ValidationError,
)


def _input(name="svc-a", **fields):
    return parse_service_input({"name": name, **fields})


class TestBumpVersion:
    @pytest.mark.parametrize(
        "previous, expected",
        [("v1", "v2"), ("v9", "v10"), (None, "v1"), ("", "v1"), ("1.0", "v1"), ("vX", "v1")],
    )
    def test_bump(self, previous, expected) -> None:
        assert bump_version(previous) == expected


class TestParseServiceInput:
    def test_valid_payload(self) -> None:
        svc = parse_service_input({
            "name": "svc-a",
            "dependencies": {"non-critical": [{"name": "cache"}]},
        })
        assert svc.name == "svc-a"
        assert svc.dependencies.non_critical[0].name == "cache"

    def test_metadata_rejected_before_validation(self) -> None:
        with pytest.raises(MetadataProvidedError) as exc_info:
            parse_service_input({"metadata": {"version": "v7"}})
        assert exc_info.value.status_code == 400

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_service_input({"name": "svc-a", "colour": "blue"})
        assert exc_info.value.status_code == 400
        assert exc_info.value.issues[0]["loc"] == ["colour"]

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_service_input({"name": "   "})

    def test_dependency_without_name_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_service_input({"name": "a", "dependencies": {"critical": [{"role": "db"}]}})
        assert exc_info.value.issues

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_service_input(["not", "an", "object"])

    def test_contract_extra_keys_pass_through(self) -> None:
        svc = parse_service_input({"name": "a", "contracts": [{"role": "api", "spec": "x.yaml"}]})
        assert svc.to_wire()["contracts"] == [{"role": "api", "spec": "x.yaml"}]


class TestCatalogStore:
    def test_create_assigns_v1_metadata(self, store) -> None:
        stored = store.create(_input(team="Newton"))

        wire = stored.to_wire()
        assert wire["metadata"] == {
            "createdAt": "2026-10-19",
            "updatedAt": "2026-10-19",
            "version": "v1",
        }
        assert wire["team"] == "Newton"
        assert len(store) == 1

    def test_create_duplicate_conflicts(self, store) -> None:
        store.create(_input())
        with pytest.raises(ConflictError, match="already exists"):
            store.create(_input())

    def test_replace_bumps_version_and_keeps_created(self) -> None:
        days = iter(["2026-01-01", "2026-02-01", "2026-03-01"])
        store = CatalogStore(today=lambda: next(days))
        store.create(_input(team="one"))
        store.replace("svc-a", _input(team="two"))
        stored = store.replace("svc-a", _input())

        assert stored.metadata.created_at == "2026-01-01"
        assert stored.metadata.updated_at == "2026-03-01"
        assert stored.metadata.version == "v3"
        assert stored.team is None

    def test_replace_name_mismatch_checked_before_existence(self, store) -> None:
        with pytest.raises(NameMismatchError):
            store.replace("missing", _input("other"))

    def test_replace_missing(self, store) -> None:
        with pytest.raises(NotFoundError):
            store.replace("svc-a", _input())

    def test_get_and_list_preserve_insertion_order(self, store) -> None:
        for name in ("b", "a", "c"):
            store.create(_input(name))
        assert [s.name for s in store.list()] == ["b", "a", "c"]
        assert store.get("a").name == "a"

    def test_get_missing(self, store) -> None:
        with pytest.raises(NotFoundError):
            store.get("nope")

    def test_delete(self, store) -> None:
        store.create(_input())
        store.delete("svc-a")
        assert len(store) == 0
        with pytest.raises(NotFoundError):
            store.delete("svc-a")

    def test_reset(self, store) -> None:
        store.create(_input("a"))
        store.create(_input("b"))
        store.reset()
        assert store.list() == []
