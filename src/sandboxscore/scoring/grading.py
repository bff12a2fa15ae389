"""Scoring and grading — points totals, letter grades, and grade caps.

Grade thresholds (points lost → letter), first match wins:

    0 → A+,  1–10 → A,  11–30 → B,  31–60 → C,  61–100 → D,  101+ → F

Caps are floors: an exposed finding for a capped test keeps the grade at
least as bad as the cap letter. A cap never improves a grade.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from sandboxscore.findings.models import CATEGORIES, Finding, Status
from sandboxscore.scoring.policy import Profile, points_for

GRADES: Tuple[str, ...] = ("A+", "A", "B", "C", "D", "F")

_GRADE_RANK: Dict[str, int] = {g: i for i, g in enumerate(GRADES)}

# Unknown grades sort as worse than F.
UNKNOWN_GRADE_RANK = 99

# (upper bound inclusive, grade)
GRADE_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (0, "A+"),
    (10, "A"),
    (30, "B"),
    (60, "C"),
    (100, "D"),
)


@dataclass(frozen=True)
class CapRule:
    """Exposure of *test_name* floors the grade at *grade*.

    When *profile* is set the rule only applies under that profile.
    """

    test_name: str
    grade: str
    profile: Optional[Profile] = None

    def applies_to(self, profile: Profile) -> bool:
        return self.profile is None or self.profile is profile


CAP_RULES: Tuple[CapRule, ...] = (
    CapRule("ssh_keys", "B"),
    CapRule("cloud_creds", "C"),
    CapRule("contacts", "C", Profile.SENSITIVE),
)


def grade_rank(grade: str) -> int:
    """Badness of *grade*: A+ is 0, F is 5, anything else is worse than F."""
    return _GRADE_RANK.get(grade, UNKNOWN_GRADE_RANK)


def worse_of(a: str, b: str) -> str:
    return a if grade_rank(a) >= grade_rank(b) else b


def points_to_grade(points: int) -> str:
    for upper, grade in GRADE_THRESHOLDS:
        if points <= upper:
            return grade
    return "F"


@dataclass
class GradeReport:
    """Grade of one finding snapshot under one profile."""

    profile: Profile
    total_points: int = 0
    category_points: Dict[str, int] = field(default_factory=dict)
    base_grade: str = "A+"
    applied_caps: List[str] = field(default_factory=list)
    cap_grade: Optional[str] = None
    final_grade: str = "A+"
    exposures: int = 0
    summary: Dict[str, int] = field(default_factory=dict)

    @property
    def capped(self) -> bool:
        return self.final_grade != self.base_grade

    def category_grades(self) -> Dict[str, str]:
        """Points-only grade per category; fixed categories always present."""
        grades = {cat: points_to_grade(self.category_points.get(cat, 0)) for cat in CATEGORIES}
        for cat, pts in self.category_points.items():
            if cat not in grades:
                grades[cat] = points_to_grade(pts)
        return grades


def triggered_caps(findings: Iterable[Finding], profile: Profile) -> List[CapRule]:
    """Cap rules triggered under *profile*, once each, in finding order."""
    rules = {rule.test_name: rule for rule in CAP_RULES if rule.applies_to(profile)}
    hits: "OrderedDict[str, CapRule]" = OrderedDict()
    for finding in findings:
        if finding.status is not Status.EXPOSED:
            continue
        rule = rules.get(finding.test_name)
        if rule is not None and rule.test_name not in hits:
            hits[rule.test_name] = rule
    return list(hits.values())


def compute_report(findings: Iterable[Finding], profile: Profile) -> GradeReport:
    """Grade *findings* under *profile*.

    Pure: severities are recomputed from each finding's base severity, so the
    result depends only on the findings and the profile passed in.
    """
    profile = Profile.parse(profile)
    snapshot = tuple(findings)

    total = 0
    per_category: Dict[str, int] = {}
    counts: Dict[str, int] = {s.value: 0 for s in Status}
    for finding in snapshot:
        pts = points_for(finding, profile)
        total += pts
        per_category[finding.category] = per_category.get(finding.category, 0) + pts
        counts[finding.status.value] += 1

    base = points_to_grade(total)
    caps = triggered_caps(snapshot, profile)
    cap_grade: Optional[str] = None
    for rule in caps:
        cap_grade = rule.grade if cap_grade is None else worse_of(cap_grade, rule.grade)
    final = worse_of(base, cap_grade) if cap_grade is not None else base

    return GradeReport(
        profile=profile,
        total_points=total,
        category_points=per_category,
        base_grade=base,
        applied_caps=[rule.test_name for rule in caps],
        cap_grade=cap_grade,
        final_grade=final,
        exposures=counts[Status.EXPOSED.value],
        summary={
            "total": len(snapshot),
            "exposed": counts[Status.EXPOSED.value],
            "protected": counts[Status.BLOCKED.value],
            **counts,
        },
    )
