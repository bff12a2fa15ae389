"""Policy gate — ``metric<op>threshold`` expressions for CI pass/fail.

Semantics are literal for every metric: when the expression is true the run
fails (exit 1), otherwise it passes (exit 0). Write the *failure* condition:

    score>=50       fail once 50 or more points are lost
    exposures>=10   fail at ten or more exposed findings
    grade>=D        fail on a D or an F
    grade<=C        fail on C or better (almost never what you want)
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Union

from sandboxscore.scoring.grading import GRADES, GradeReport, grade_rank

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_USAGE = 2

METRICS = ("score", "grade", "exposures")

_COMPARATORS: Dict[str, Callable[[Any, Any], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
}

# Longest operators first so ">=" is never read as ">".
_GATE_RE = re.compile(r"^(?P<metric>[a-z]+)(?P<op>>=|<=|==|!=|>|<)(?P<threshold>\S+)$")
_INT_RE = re.compile(r"^[0-9]+$")


class GateError(ValueError):
    """Raised for an unparseable gate expression."""


@dataclass(frozen=True)
class GateExpression:
    metric: str
    comparator: str
    threshold: Union[int, str]

    def __str__(self) -> str:
        return f"{self.metric}{self.comparator}{self.threshold}"


@dataclass(frozen=True)
class GateMetrics:
    """The computed values a gate can test."""

    score: int
    grade: str
    exposures: int

    @classmethod
    def from_report(cls, report: GradeReport) -> "GateMetrics":
        return cls(score=report.total_points, grade=report.final_grade, exposures=report.exposures)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "GateMetrics":
        """Read metrics back out of a JSON report document."""
        try:
            results = data["results"]
            return cls(
                score=int(results["points_lost"]),
                grade=str(results["grade"]),
                exposures=int(results["summary"]["exposed"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GateError(f"Report is missing gate metrics: {exc}") from exc


def parse_gate(expression: str) -> GateExpression:
    """Parse *expression*; raise GateError if it is not ``metric<op>threshold``."""
    if not isinstance(expression, str) or not expression.strip():
        raise GateError("Empty gate expression")
    m = _GATE_RE.match(expression.strip())
    if m is None:
        raise GateError(
            f"Invalid gate expression '{expression}'. "
            "Expected metric<op>threshold, e.g. score>=50 or grade>=D"
        )
    metric, op, raw = m.group("metric"), m.group("op"), m.group("threshold")
    if metric not in METRICS:
        raise GateError(f"Unknown gate metric '{metric}'. Valid: {', '.join(METRICS)}")

    if metric == "grade":
        grade = raw.upper()
        if grade not in GRADES:
            raise GateError(f"Unknown grade '{raw}'. Valid: {', '.join(GRADES)}")
        return GateExpression(metric, op, grade)

    if not _INT_RE.match(raw):
        raise GateError(f"Threshold for {metric} must be a non-negative integer, got '{raw}'")
    return GateExpression(metric, op, int(raw))


def evaluate(expression: Union[str, GateExpression], metrics: Union[GateMetrics, GradeReport]) -> bool:
    """Return True when the gate condition holds, i.e. the run should fail."""
    gate = parse_gate(expression) if isinstance(expression, str) else expression
    if isinstance(metrics, GradeReport):
        metrics = GateMetrics.from_report(metrics)

    compare = _COMPARATORS[gate.comparator]
    if gate.metric == "grade":
        return compare(grade_rank(metrics.grade), grade_rank(str(gate.threshold)))
    actual = metrics.score if gate.metric == "score" else metrics.exposures
    return compare(actual, gate.threshold)


def exit_code_for(failed: bool) -> int:
    return EXIT_FAIL if failed else EXIT_PASS
