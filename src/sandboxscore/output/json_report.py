"""JSON reporter for CI pipelines and dashboards."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, Iterable, Optional

from sandboxscore import METHODOLOGY_VERSION, __version__
from sandboxscore.findings.models import Finding
from sandboxscore.scoring.grading import GradeReport
from sandboxscore.scoring.projector import cross_profile


def to_dict(
    findings: Iterable[Finding],
    report: GradeReport,
    *,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    """Convert a graded scan to a JSON-serialisable dict.

    ``findings`` maps test name to status; a test emitted twice keeps its
    last status.
    """
    snapshot = tuple(findings)
    return {
        "v": METHODOLOGY_VERSION,
        "ts": timestamp or date.today().isoformat(),
        "scanner": __version__,
        "methodology": METHODOLOGY_VERSION,
        "profile": report.profile.value,
        "results": {
            "grade": report.final_grade,
            "points_lost": report.total_points,
            "categories": report.category_grades(),
            "caps": list(report.applied_caps),
            "summary": {
                "total": report.summary.get("total", 0),
                "protected": report.summary.get("protected", 0),
                "exposed": report.summary.get("exposed", 0),
            },
            "cross_profile": cross_profile(snapshot),
            "findings": {f.test_name: f.status.value for f in snapshot},
        },
    }


def render(findings: Iterable[Finding], report: GradeReport, **kwargs: Any) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(findings, report, **kwargs), indent=2)
