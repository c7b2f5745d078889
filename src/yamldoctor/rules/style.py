#!/usr/bin/env python3
"""
YAML-DOCTOR STYLE RULES
-----------------------
Line-oriented checks run against the raw text of every file, before any
parsing happens. A single line may produce several findings.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import re
from typing import List

from yamldoctor.core.models import Issue, Severity
from yamldoctor.rules.base import make_issue

MAX_LINE_LENGTH = 160

# Lines are split on '\n' with an optional preceding '\r'
LINE_SPLIT = re.compile(r"\r?\n")


class StyleRules:
    """Tabs, trailing whitespace and overlong lines."""

    def __init__(self, max_line_length: int = MAX_LINE_LENGTH):
        self.max_line_length = max_line_length

    def check(self, text: str) -> List[Issue]:
        issues: List[Issue] = []

        for line_no, line in enumerate(LINE_SPLIT.split(text), 1):
            if "\t" in line:
                issues.append(make_issue(Severity.WARN, "style.tabs",
                                         "Tab found (use spaces)", line_no))

            if line.endswith((" ", "\t")):
                issues.append(make_issue(Severity.INFO, "style.trailingSpace",
                                         "Trailing whitespace at end of line", line_no))

            # Measured in code points; an emoji counts as one column
            if len(line) > self.max_line_length:
                issues.append(make_issue(Severity.INFO, "style.lineLength",
                                         f"Line with >{self.max_line_length} columns", line_no))

        return issues


def check_style(text: str) -> List[Issue]:
    return StyleRules().check(text)
