"""Shared test fixtures — finding stores and findings documents."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from sandboxscore.findings.store import FindingStore


@pytest.fixture
def empty_store() -> FindingStore:
    return FindingStore("personal")


@pytest.fixture
def mixed_store() -> FindingStore:
    """A typical scan: some exposures, some protected, one skipped."""
    store = FindingStore("personal")
    store.record("credentials", "ssh_keys", "exposed", "2", "critical")
    store.record("credentials", "cloud_creds", "blocked", "", "critical")
    store.record("personal_data", "contacts", "exposed", "3", "high")
    store.record("personal_data", "shell_history", "exposed", "120", "medium")
    store.record("system_visibility", "processes", "exposed", "84", "low")
    store.record("network", "outbound_http", "skipped", "network_tests_disabled", "info")
    return store


@pytest.fixture
def findings_yaml() -> str:
    return textwrap.dedent("""\
        findings:
          - category: credentials
            test_name: ssh_keys
            status: exposed
            value: "1"
            severity: critical
          - category: personal_data
            test_name: contacts
            status: exposed
            value: "3"
            severity: high
          - category: network
            test: outbound_http
            status: skipped
            value: network_tests_disabled
            severity: info
    """)


@pytest.fixture
def findings_file(tmp_path: Path, findings_yaml: str) -> Path:
    path = tmp_path / "findings.yaml"
    path.write_text(findings_yaml)
    return path


@pytest.fixture
def clean_findings_file(tmp_path: Path) -> Path:
    path = tmp_path / "clean.yaml"
    path.write_text(textwrap.dedent("""\
        - {category: credentials, test_name: ssh_keys, status: blocked, severity: critical}
        - {category: credentials, test_name: cloud_creds, status: not_found, severity: critical}
    """))
    return path
