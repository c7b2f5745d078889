#!/usr/bin/env python3
"""
YAML-DOCTOR RULE PRIMITIVES
---------------------------
Helpers shared by the structural rule sets. Parsed documents are plain
dicts/lists/scalars as produced by the safe loader, so every rule checks
shapes explicitly before touching a field.

Author: yaml-doctor Team
Date: 2026-10-19
"""

from typing import Any, List, Optional

from yamldoctor.core.models import Issue, Severity


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def is_sequence(value: Any) -> bool:
    return isinstance(value, list)


def truthy(value: Any) -> bool:
    """
    Loose presence test used by the field checks.

    None, False, numeric zero and the empty string count as absent.
    Empty mappings and sequences count as present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0     # NaN is absent too
    if isinstance(value, str):
        return value != ""
    return True


def get_field(obj: Any, key: str) -> Any:
    """Returns obj[key] for mappings, None for anything else."""
    if is_mapping(obj):
        return obj.get(key)
    return None


def has_latest_tag(image: Any) -> bool:
    return isinstance(image, str) and image.endswith(":latest")


def make_issue(severity: Severity, code: str, message: str, line: Optional[int] = None) -> Issue:
    return Issue(severity=severity, code=code, message=message, line=line)


class RuleSet:
    """
    Base class for the per-type structural rule sets.

    Subclasses implement `evaluate`, returning issues in evaluation order.
    """

    name = "base"

    def evaluate(self, doc: Any) -> List[Issue]:
        raise NotImplementedError
