"""Finding store — append-only record of every check outcome in a scan."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator, List, Optional, Tuple, Union

from sandboxscore.findings.models import (
    BASE_SEVERITIES,
    Finding,
    FindingError,
    Severity,
    Status,
    sanitize_value,
)
from sandboxscore.scoring.policy import (
    DEFAULT_PROFILE,
    Profile,
    effective_severity,
    severity_points,
)

logger = logging.getLogger(__name__)


def _coerce_status(test_name: str, status: Union[str, Status]) -> Status:
    try:
        return Status(status)
    except ValueError:
        logger.warning("Unknown status '%s' for %s, treating as error", status, test_name)
        return Status.ERROR


def _coerce_severity(test_name: str, severity: Union[str, Severity, None]) -> Severity:
    if severity is None or severity == "":
        return Severity.MEDIUM
    if isinstance(severity, Severity):
        if severity not in BASE_SEVERITIES:
            raise FindingError(f"Invalid severity '{severity.value}' for {test_name}")
        return severity
    try:
        sev = Severity(str(severity).lower())
    except ValueError:
        sev = None
    if sev not in BASE_SEVERITIES:
        raise FindingError(f"Invalid severity '{severity}' for {test_name}")
    return sev


class FindingStore:
    """In-memory, append-only sequence of findings.

    *profile* is the active profile; it only decides the severity and points
    frozen onto each finding at record time. Reports always recompute from
    the base severity, so the store can be graded under any profile.
    """

    def __init__(self, profile: Union[str, Profile] = DEFAULT_PROFILE) -> None:
        self.profile = Profile.parse(profile)
        self._findings: List[Finding] = []
        self._lock = threading.Lock()

    def record(
        self,
        category: str,
        test_name: str,
        status: Union[str, Status],
        value: Optional[object] = None,
        base_severity: Union[str, Severity, None] = Severity.MEDIUM,
    ) -> Finding:
        """Append one finding and return it.

        Raises FindingError when a required field is empty or the severity is
        not a known base severity. Nothing is stored in that case.
        """
        if not category or not test_name or not status:
            raise FindingError("record() got empty required field (category, test_name, status)")

        status = _coerce_status(test_name, status)
        base = _coerce_severity(test_name, base_severity)
        effective = effective_severity(test_name, base, self.profile, status)
        points = severity_points(effective) if status is Status.EXPOSED else 0

        finding = Finding(
            category=str(category),
            test_name=str(test_name),
            status=status,
            value=sanitize_value(value),
            base_severity=base,
            effective_severity=effective,
            points=points,
        )
        with self._lock:
            self._findings.append(finding)
        logger.debug(
            "record: %s/%s=%s (%s, %dpts)",
            finding.category, finding.test_name, status.value, effective.value, points,
        )
        return finding

    def for_each(self, callback: Callable[[Finding], None]) -> None:
        """Call *callback* for every finding in insertion order."""
        for finding in self.findings:
            callback(finding)

    # ---- queries ----

    @property
    def findings(self) -> Tuple[Finding, ...]:
        with self._lock:
            return tuple(self._findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.findings)

    def __len__(self) -> int:
        return len(self._findings)
