"""Scoring — severity policy, grading, cross-profile projection, policy gate."""

from sandboxscore.scoring.gate import (
    GateError,
    GateExpression,
    GateMetrics,
    evaluate,
    exit_code_for,
    parse_gate,
)
from sandboxscore.scoring.grading import CAP_RULES, CapRule, GradeReport, compute_report
from sandboxscore.scoring.policy import Profile, ProfileError, effective_severity
from sandboxscore.scoring.projector import cross_profile, project_under

__all__ = [
    "CAP_RULES",
    "CapRule",
    "GateError",
    "GateExpression",
    "GateMetrics",
    "GradeReport",
    "Profile",
    "ProfileError",
    "compute_report",
    "cross_profile",
    "effective_severity",
    "evaluate",
    "exit_code_for",
    "parse_gate",
    "project_under",
]
