"""Tests for cross-profile projection."""

import pytest

from sandboxscore.findings.store import FindingStore
from sandboxscore.scoring.grading import compute_report
from sandboxscore.scoring.policy import Profile, ProfileError
from sandboxscore.scoring.projector import cross_profile, project_under


class TestProjectUnder:
    @pytest.mark.parametrize("profile", list(Profile))
    def test_same_profile_matches_report(self, mixed_store, profile):
        store = FindingStore(profile)
        for f in mixed_store:
            store.record(f.category, f.test_name, f.status, f.value, f.base_severity)
        assert project_under(store, store.profile) == compute_report(store, store.profile)

    def test_contacts_under_sensitive(self):
        store = FindingStore("personal")
        store.record("personal_data", "contacts", "exposed", "3", "high")
        assert compute_report(store, store.profile).final_grade == "A+"

        projected = project_under(store, "sensitive")
        assert projected.total_points == 20
        assert projected.applied_caps == ["contacts"]
        assert projected.final_grade == "C"

    def test_does_not_touch_active_profile(self, mixed_store):
        frozen = [f.points for f in mixed_store]
        project_under(mixed_store, Profile.SENSITIVE)
        assert mixed_store.profile is Profile.PERSONAL
        assert [f.points for f in mixed_store] == frozen

    def test_unknown_profile(self, mixed_store):
        with pytest.raises(ProfileError):
            project_under(mixed_store, "paranoid")


class TestCrossProfile:
    def test_all_profiles_present(self, empty_store):
        assert cross_profile(empty_store) == {
            "personal": "A+",
            "professional": "A+",
            "sensitive": "A+",
        }

    def test_grades_differ_by_profile(self):
        store = FindingStore("personal")
        store.record("personal_data", "contacts", "exposed", "3", "high")
        store.record("personal_data", "messages", "exposed", "2", "high")
        grades = cross_profile(store)
        assert grades["personal"] == "A+"       # both ignored
        assert grades["professional"] == "A"    # 2 x medium = 10
        assert grades["sensitive"] == "C"       # 40 points, contacts cap
