"""Severity policy — profiles, profile overrides, and the points table.

Everything here is pure: the profile is always an explicit argument, so a
grade can be recomputed under any profile without touching scan state.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Union

from sandboxscore.findings.models import Severity, Status


class ProfileError(ValueError):
    """Raised for an unknown profile name."""


class Profile(str, Enum):
    PERSONAL = "personal"          # own machine, own data
    PROFESSIONAL = "professional"  # work machine, client data possible
    SENSITIVE = "sensitive"        # PII, financial or health data

    @classmethod
    def parse(cls, name: Union[str, "Profile", None]) -> "Profile":
        if isinstance(name, cls):
            return name
        if not name:
            raise ProfileError("Profile not specified")
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ProfileError(f"Invalid profile '{name}'. Valid: {valid}") from None


DEFAULT_PROFILE = Profile.PERSONAL

POINTS: Dict[Severity, int] = {
    Severity.CRITICAL: 50,
    Severity.HIGH: 20,
    Severity.MEDIUM: 5,
    Severity.LOW: 1,
    Severity.INFO: 0,
    Severity.IGNORE: 0,
}

# Per-profile severity overrides, keyed by test name.
PROFILE_OVERRIDES: Mapping[Profile, Mapping[str, Severity]] = {
    Profile.PERSONAL: {
        "contacts": Severity.IGNORE,
        "messages": Severity.IGNORE,
        "browser_history": Severity.IGNORE,
        "photos": Severity.IGNORE,
    },
    Profile.PROFESSIONAL: {
        "contacts": Severity.MEDIUM,
        "messages": Severity.MEDIUM,
    },
    Profile.SENSITIVE: {},
}


def effective_severity(
    test_name: str,
    base_severity: Severity,
    profile: Profile,
    status: Status = Status.EXPOSED,
) -> Severity:
    """Return the severity a finding carries under *profile*.

    Non-exposed findings are always ``info``; they never cost points.
    """
    if status is not Status.EXPOSED:
        return Severity.INFO
    override = PROFILE_OVERRIDES[profile].get(test_name)
    return override if override is not None else base_severity


def severity_points(severity: Severity) -> int:
    return POINTS[severity]


def points_for(finding, profile: Profile) -> int:
    """Points *finding* costs when graded under *profile*."""
    if not finding.exposed:
        return 0
    return POINTS[effective_severity(finding.test_name, finding.base_severity, profile)]
