"""Raw line reporter — ``category:test_name:status[:value]`` per finding."""

from __future__ import annotations

from typing import Iterable, List

from sandboxscore.findings.models import Finding


def lines(findings: Iterable[Finding]) -> List[str]:
    out: List[str] = []
    for f in findings:
        parts = [f.category, f.test_name, f.status.value]
        if f.value:
            parts.append(f.value)
        out.append(":".join(parts))
    return out


def render(findings: Iterable[Finding]) -> str:
    return "\n".join(lines(findings))
