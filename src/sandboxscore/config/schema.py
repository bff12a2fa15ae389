"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["human", "json", "raw"]

OUTPUT_FORMATS = ("human", "json", "raw")


@dataclass
class ScanConfig:
    profile: str = "personal"  # personal | professional | sensitive
    fail_on: Optional[str] = None  # gate expression, e.g. "score>=50"
    categories: List[str] = field(default_factory=list)  # empty = all


@dataclass
class OutputConfig:
    format: OutputFormat = "human"
    show_summary: bool = True
    show_remediation: bool = True


@dataclass
class SandboxScoreConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
