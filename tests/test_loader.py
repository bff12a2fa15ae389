"""Tests for loading findings documents into a store."""

import io
import json
from pathlib import Path

import pytest

from sandboxscore.findings.loader import (
    FindingsFileError,
    load_findings,
    load_into,
    parse_categories,
)
from sandboxscore.findings.models import FindingError, Status
from sandboxscore.findings.store import FindingStore


class TestParseCategories:
    def test_comma_separated(self):
        assert parse_categories("credentials, network,") == ["credentials", "network"]

    def test_empty(self):
        assert parse_categories("") is None
        assert parse_categories(None) is None
        assert parse_categories(" , ") is None


class TestLoadInto:
    def test_yaml_mapping_document(self, findings_yaml):
        store = FindingStore("personal")
        assert load_into(store, findings_yaml) == 3
        names = [f.test_name for f in store]
        assert names == ["ssh_keys", "contacts", "outbound_http"]
        assert store.findings[2].status is Status.SKIPPED

    def test_json_list_document(self):
        doc = json.dumps([
            {"category": "credentials", "test_name": "cloud_creds", "status": "exposed",
             "value": "aws", "base_severity": "critical"},
        ])
        store = FindingStore("personal")
        load_into(store, doc)
        assert store.findings[0].points == 50

    def test_empty_document(self):
        store = FindingStore("personal")
        assert load_into(store, "") == 0

    def test_category_filter(self, findings_yaml):
        store = FindingStore("personal")
        assert load_into(store, findings_yaml, categories=["credentials"]) == 1
        assert [f.test_name for f in store] == ["ssh_keys"]

    def test_numeric_value_kept_as_text(self):
        store = FindingStore("personal")
        load_into(store, "- {category: system_visibility, test_name: processes, status: exposed, value: 84}")
        assert store.findings[0].value == "84"

    @pytest.mark.parametrize(
        "doc",
        [
            "findings: {category: x}",
            "- just a string",
            "42",
            "[unclosed",
        ],
    )
    def test_bad_shape(self, doc):
        with pytest.raises(FindingsFileError):
            load_into(FindingStore("personal"), doc)

    def test_invalid_entry_names_index(self):
        doc = "- {category: credentials, test_name: ssh_keys, status: exposed}\n- {category: credentials}\n"
        store = FindingStore("personal")
        with pytest.raises(FindingError, match="#1"):
            load_into(store, doc)
        assert len(store) == 1

    @pytest.mark.parametrize(
        "doc",
        [
            "- {category: [network], test_name: outbound_http, status: exposed}",
            "- {category: {a: 1}, test_name: outbound_http, status: exposed}",
            "- {category: network, test_name: outbound_http, status: [exposed]}",
        ],
    )
    def test_non_scalar_field_with_filter(self, doc):
        store = FindingStore("personal")
        with pytest.raises(FindingsFileError, match="#0.*must be a scalar"):
            load_into(store, doc, categories=["network"])
        assert len(store) == 0


class TestLoadFindings:
    def test_from_path(self, findings_file: Path):
        store = FindingStore("sensitive")
        assert load_findings(findings_file, store) == 3

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FindingsFileError):
            load_findings(tmp_path / "nope.yaml", FindingStore("personal"))

    def test_stdin(self, monkeypatch, findings_yaml):
        monkeypatch.setattr("sys.stdin", io.StringIO(findings_yaml))
        store = FindingStore("personal")
        assert load_findings("-", store) == 3
