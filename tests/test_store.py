"""Tests for the finding model and store."""

import logging
import threading

import pytest

from sandboxscore.findings.models import Finding, FindingError, Severity, Status, sanitize_value
from sandboxscore.findings.store import FindingStore


class TestRecord:
    def test_returns_frozen_finding(self, empty_store):
        f = empty_store.record("credentials", "ssh_keys", "exposed", "1", "critical")
        assert isinstance(f, Finding)
        assert f.status is Status.EXPOSED
        assert f.base_severity is Severity.CRITICAL
        assert f.effective_severity is Severity.CRITICAL
        assert f.points == 50
        with pytest.raises(AttributeError):
            f.points = 0  # type: ignore[misc]

    def test_default_severity_is_medium(self, empty_store):
        f = empty_store.record("persistence", "tmp_write", "exposed")
        assert f.base_severity is Severity.MEDIUM
        assert f.points == 5
        assert f.value == ""

    def test_duplicates_accumulate(self, empty_store):
        empty_store.record("credentials", "env_secrets", "exposed", "1", "high")
        empty_store.record("credentials", "env_secrets", "exposed", "2", "high")
        assert len(empty_store) == 2

    def test_non_exposed_costs_nothing(self, empty_store):
        for status in ("blocked", "not_found", "error", "skipped"):
            f = empty_store.record("credentials", "ssh_keys", status, "", "critical")
            assert f.points == 0
            assert f.effective_severity is Severity.INFO

    def test_personal_profile_override_frozen(self):
        store = FindingStore("personal")
        f = store.record("personal_data", "contacts", "exposed", "3", "high")
        assert f.effective_severity is Severity.IGNORE
        assert f.points == 0


class TestInvalidInput:
    @pytest.mark.parametrize(
        "args",
        [
            ("", "ssh_keys", "exposed"),
            ("credentials", "", "exposed"),
            ("credentials", "ssh_keys", ""),
        ],
    )
    def test_empty_required_field_rejected(self, empty_store, args):
        with pytest.raises(FindingError):
            empty_store.record(*args)
        assert len(empty_store) == 0

    def test_unknown_severity_rejected(self, empty_store):
        with pytest.raises(FindingError):
            empty_store.record("credentials", "ssh_keys", "exposed", "1", "catastrophic")

    def test_ignore_is_not_a_base_severity(self, empty_store):
        with pytest.raises(FindingError):
            empty_store.record("credentials", "ssh_keys", "exposed", "1", Severity.IGNORE)

    def test_rejection_keeps_earlier_findings(self, mixed_store):
        before = mixed_store.findings
        with pytest.raises(FindingError):
            mixed_store.record("", "x", "exposed")
        assert mixed_store.findings == before

    def test_unknown_status_coerced_to_error(self, empty_store, caplog):
        with caplog.at_level(logging.WARNING, logger="sandboxscore.findings.store"):
            f = empty_store.record("credentials", "ssh_keys", "leaked", "1", "critical")
        assert f.status is Status.ERROR
        assert f.points == 0
        assert "Unknown status" in caplog.text


class TestSanitize:
    def test_record_separator_stripped(self, empty_store):
        f = empty_store.record("credentials", "ssh_keys", "exposed", "a\x1fb\nc", "critical")
        assert f.value == "a_b_c"

    def test_none_and_numbers(self):
        assert sanitize_value(None) == ""
        assert sanitize_value(3) == "3"


class TestIteration:
    def test_for_each_insertion_order(self, mixed_store):
        seen = []
        mixed_store.for_each(lambda f: seen.append(f.test_name))
        assert seen == [
            "ssh_keys", "cloud_creds", "contacts", "shell_history", "processes", "outbound_http",
        ]

    def test_empty_store(self, empty_store):
        assert list(empty_store) == []
        assert len(empty_store) == 0


class TestConcurrency:
    def test_parallel_records_all_kept(self, empty_store):
        threads, per_thread = 8, 200

        def worker(i):
            for j in range(per_thread):
                empty_store.record("network", f"t{i}_{j}", "blocked")

        pool = [threading.Thread(target=worker, args=(i,)) for i in range(threads)]
        for t in pool:
            t.start()
        for t in pool:
            t.join()

        assert len(empty_store) == threads * per_thread
        names = {f.test_name for f in empty_store}
        assert names == {f"t{i}_{j}" for i in range(threads) for j in range(per_thread)}


class TestProfile:
    def test_invalid_profile_rejected(self):
        from sandboxscore.scoring.policy import ProfileError

        with pytest.raises(ProfileError):
            FindingStore("paranoid")
