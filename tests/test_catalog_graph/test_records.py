"""Tests for lenient service record parsing."""
from __future__ import annotations

from src.catalog_graph.records import parse_service_record, parse_service_records
from src.shared.models.catalog import ServiceInput


class TestParseServiceRecord:
    def test_flat_record(self) -> None:
        record, issues = parse_service_record({
            "name": "svc",
            "team": "core",
            "contracts": [{"role": "api"}, {"role": "ignored"}],
            "dependencies": {
                "critical": [{"name": "db", "role": "storage", "protocol": "sql"}],
                "non-critical": [{"name": "cache"}],
            },
            "events": {"producing": [{"name": "A"}], "consuming": [{"name": "B"}]},
            "metadata": {"updatedAt": "2026-01-02"},
        })
        assert issues == []
        assert record.name == "svc"
        assert record.team == "core"
        assert record.contract_role == "api"
        assert [(d.name, d.critical) for d in record.dependencies] == [
            ("db", True), ("cache", False),
        ]
        assert record.dependencies[0].protocol == "sql"
        assert record.producing == ["A"]
        assert record.consuming == ["B"]
        assert record.updated_at == "2026-01-02"

    def test_blank_name_skipped(self) -> None:
        record, issues = parse_service_record({"name": "   "}, index=3)
        assert record is None
        assert issues[0].index == 3
        assert issues[0].reason == "record has no name"

    def test_wrong_types_treated_as_empty(self) -> None:
        record, issues = parse_service_record({
            "name": "svc",
            "contracts": "nope",
            "dependencies": {"critical": {"name": "x"}},
            "events": [],
            "team": 42,
        })
        assert issues == []
        assert record.contract_role is None
        assert record.dependencies == []
        assert record.producing == []
        assert record.team is None

    def test_pydantic_model_accepted(self) -> None:
        svc = ServiceInput.model_validate({
            "name": "svc",
            "dependencies": {"non-critical": [{"name": "x"}]},
        })
        record, issues = parse_service_record(svc)
        assert issues == []
        assert [(d.name, d.critical) for d in record.dependencies] == [("x", False)]

    def test_envelope_ownership_falls_back_to_service(self) -> None:
        record, _ = parse_service_record({
            "service": {"name": "svc", "owner": "me", "metadata": {"team": "core"}},
        })
        assert record.owner == "me"
        assert record.team == "core"


class TestParseServiceRecords:
    def test_collects_issues_across_records(self, caplog) -> None:
        records, issues = parse_service_records([
            {"name": "a", "events": {"consuming": [{}]}},
            None,
            {"name": "b"},
        ])
        assert [r.name for r in records] == ["a", "b"]
        assert [(i.index, i.service) for i in issues] == [(0, "a"), (1, None)]
        assert "Skipped 2 malformed entries" in caplog.text
