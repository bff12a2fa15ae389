"""Cross-profile projection — regrade one scan under another profile."""

from __future__ import annotations

from typing import Dict, Iterable, Union

from sandboxscore.findings.models import Finding
from sandboxscore.scoring.grading import GradeReport, compute_report
from sandboxscore.scoring.policy import Profile


def project_under(findings: Iterable[Finding], profile: Union[str, Profile]) -> GradeReport:
    """Grade the same findings as if *profile* had been active.

    Checks are not re-run and no active-profile state is touched.
    """
    return compute_report(findings, Profile.parse(profile))


def cross_profile(findings: Iterable[Finding]) -> Dict[str, str]:
    """Final grade under every known profile."""
    snapshot = tuple(findings)
    return {p.value: project_under(snapshot, p).final_grade for p in Profile}
