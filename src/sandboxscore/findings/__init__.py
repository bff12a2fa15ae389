"""Finding models, the finding store, findings-file loading, remediation hints."""

from sandboxscore.findings.models import (
    CATEGORIES,
    Finding,
    FindingError,
    Severity,
    Status,
    sanitize_value,
)
from sandboxscore.findings.store import FindingStore
from sandboxscore.findings.loader import FindingsFileError, load_findings, load_into
from sandboxscore.findings.remediation import remediation_for

__all__ = [
    "CATEGORIES",
    "Finding",
    "FindingError",
    "FindingStore",
    "FindingsFileError",
    "Severity",
    "Status",
    "load_findings",
    "load_into",
    "remediation_for",
    "sanitize_value",
]
