#!/usr/bin/env python3
"""
YAML-DOCTOR CORE MODELS
-----------------------
Defines the value types shared by every stage of a scan: the findings
emitted by rules, the per-file results and the aggregate result that is
handed to the reporters.

Author: yaml-doctor Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Iterable


class Severity(str, Enum):
    """Finding severity. The value is the serialized name."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class FileType(str, Enum):
    """Classification that selects the structural rule set for a file."""
    GENERIC = "generic"
    DOCKER_COMPOSE = "docker-compose"
    GITHUB_ACTIONS = "github-actions"
    KUBERNETES = "kubernetes"


# Score deduction per finding
SEVERITY_WEIGHTS: Dict[Severity, int] = {
    Severity.ERROR: 12,
    Severity.WARN: 4,
    Severity.INFO: 1,
}

MAX_SCORE = 100

DEFAULT_IGNORE_PATTERNS = (
    "**/node_modules/**",
    "**/.git/**",
    "**/vendor/**",
    "**/target/**",
    "**/bin/**",
)


@dataclass(frozen=True)
class Issue:
    """
    A single finding.

    `line` is 1-based and only set for text-level (style) findings.
    """
    severity: Severity
    code: str                   # Dotted identifier, e.g. 'k8s.latestTag'
    message: str
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
        }
        if self.line is not None:
            data["line"] = self.line
        return data


@dataclass
class FileResult:
    """Findings for one scanned file. Style issues come first."""
    path: str                   # Forward-slash path relative to the scan root
    type: FileType = FileType.GENERIC
    issues: List[Issue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "type": self.type.value,
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass
class ScanResult:
    """Aggregate of a whole scan, in file discovery order."""
    root: str
    files: List[FileResult] = field(default_factory=list)
    totals: Dict[Severity, int] = field(default_factory=lambda: empty_totals())
    score: int = MAX_SCORE

    @property
    def issues(self) -> List[Issue]:
        return [issue for f in self.files for issue in f.issues]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "files": [f.to_dict() for f in self.files],
            "totals": {sev.value: self.totals.get(sev, 0) for sev in Severity},
            "score": self.score,
        }


@dataclass
class ScanOptions:
    """
    Per-engine scan configuration.

    ignore_patterns replaces the default list when given; workers > 1
    enables the bounded thread pool.
    """
    ignore_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    respect_gitignore: bool = True
    workers: int = 1
    max_alias_count: int = 50


@dataclass
class OutputOptions:
    """Which report files to write and where (defaults to the scan root)."""
    generate_json: bool = True
    generate_html: bool = True
    generate_badge: bool = True
    output_dir: Optional[str] = None


def empty_totals() -> Dict[Severity, int]:
    return {sev: 0 for sev in Severity}


def severity_weight(severity: Severity) -> int:
    return SEVERITY_WEIGHTS.get(severity, 0)


def count_severities(issues: Iterable[Issue]) -> Dict[Severity, int]:
    """Sums issues by severity. Every severity key is always present."""
    totals = empty_totals()
    for issue in issues:
        totals[issue.severity] += 1
    return totals


def compute_score(totals: Dict[Severity, int]) -> int:
    """100 minus the weighted deductions, floored at 0."""
    deduction = sum(severity_weight(sev) * count for sev, count in totals.items())
    return max(0, MAX_SCORE - deduction)
