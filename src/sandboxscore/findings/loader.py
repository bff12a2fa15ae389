"""Load scan findings from a YAML or JSON document into a FindingStore.

Accepted shapes::

    - {category: credentials, test_name: ssh_keys, status: exposed, value: "2", severity: critical}

or::

    findings:
      - {category: network, test: outbound_http, status: skipped}

JSON documents are read through the same YAML parser.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Collection, Dict, List, Optional, Union

import yaml

from sandboxscore.findings.models import FindingError
from sandboxscore.findings.store import FindingStore

logger = logging.getLogger(__name__)


class FindingsFileError(Exception):
    """Raised when a findings document cannot be read or has the wrong shape."""


def parse_categories(value: Union[str, Collection[str], None]) -> Optional[List[str]]:
    """Split a comma-separated category list. Empty means no filter."""
    if not value:
        return None
    items = value.split(",") if isinstance(value, str) else list(value)
    cats = [c.strip() for c in items if c and c.strip()]
    return cats or None


def _read_text(source: Union[str, Path]) -> str:
    if str(source) == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise FindingsFileError(f"Findings file not found: {source}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FindingsFileError(f"Failed to read {source}: {exc}") from exc


_SCALAR_FIELDS = ("category", "test_name", "test", "status", "severity", "base_severity")


def _entries(data: Any, source: str) -> List[Dict[str, Any]]:
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("findings", [])
    if not isinstance(data, list):
        raise FindingsFileError(f"{source}: expected a list of findings")
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise FindingsFileError(f"{source}: finding #{idx} is not a mapping")
        for key in _SCALAR_FIELDS:
            if isinstance(entry.get(key), (list, dict)):
                raise FindingsFileError(f"{source}: finding #{idx}: {key} must be a scalar")
    return data


def load_into(
    store: FindingStore,
    text: str,
    *,
    categories: Optional[Collection[str]] = None,
    source: str = "<findings>",
) -> int:
    """Record every finding in *text* into *store*. Returns the count recorded."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FindingsFileError(f"Failed to parse {source}: {exc}") from exc

    wanted = set(categories) if categories else None
    count = 0
    for idx, entry in enumerate(_entries(data, source)):
        category = entry.get("category", "")
        if wanted is not None and category not in wanted:
            logger.debug("Skipping %s (category %s not selected)", entry.get("test_name"), category)
            continue
        try:
            store.record(
                category,
                entry.get("test_name", entry.get("test", "")),
                entry.get("status", ""),
                entry.get("value"),
                entry.get("severity", entry.get("base_severity")),
            )
        except FindingError as exc:
            raise FindingError(f"{source}: finding #{idx}: {exc}") from exc
        count += 1

    logger.info("Loaded %d finding(s) from %s", count, source)
    return count


def load_findings(
    source: Union[str, Path],
    store: FindingStore,
    *,
    categories: Optional[Collection[str]] = None,
) -> int:
    """Read *source* (a path, or ``-`` for stdin) into *store*."""
    text = _read_text(source)
    name = "<stdin>" if str(source) == "-" else str(source)
    return load_into(store, text, categories=categories, source=name)
