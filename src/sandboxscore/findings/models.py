"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FindingError(ValueError):
    """Raised when a check hands over an incomplete or invalid finding."""


class Status(str, Enum):
    EXPOSED = "exposed"
    BLOCKED = "blocked"
    NOT_FOUND = "not_found"
    ERROR = "error"
    SKIPPED = "skipped"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"
    IGNORE = "ignore"  # profile outcome only, never a base severity


# Severities a check may supply as its default weight.
BASE_SEVERITIES = frozenset(
    {Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW, Severity.INFO}
)

# Fixed finding categories, in report order.
CATEGORIES = (
    "credentials",
    "personal_data",
    "system_visibility",
    "persistence",
    "network",
    "intelligence",
)

_UNSAFE_VALUE_CHARS = ("\x1f", "\n", "\r")


def sanitize_value(value: object) -> str:
    """Normalise a check value to a single-line string.

    Record separators and line breaks are replaced with ``_`` so a value can
    never split a finding when written out line by line.
    """
    if value is None:
        return ""
    text = str(value)
    for ch in _UNSAFE_VALUE_CHARS:
        text = text.replace(ch, "_")
    return text


@dataclass(frozen=True)
class Finding:
    """One check outcome. Created once by the store, never mutated."""

    category: str
    test_name: str
    status: Status
    value: str
    base_severity: Severity
    effective_severity: Severity  # frozen under the store's active profile
    points: int

    @property
    def exposed(self) -> bool:
        return self.status is Status.EXPOSED
