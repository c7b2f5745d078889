#!/usr/bin/env python3
"""
YAML-DOCTOR REPORT WRITER
-------------------------
Persists a ScanResult as JSON, HTML and an SVG badge. Every file is
written atomically (temp file + os.replace) so a crashed run never leaves
a half-written report behind. Write failures propagate to the caller.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict

from yamldoctor.core.models import OutputOptions, ScanResult
from yamldoctor.report.badge import render_badge
from yamldoctor.report.html import BADGE_NAME, HTML_REPORT_NAME, JSON_REPORT_NAME, render_html

logger = logging.getLogger("yamldoctor.report")


def to_json(result: ScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


class ReportWriter:
    """Writes the requested report files into one output directory."""

    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)

    def write(self, result: ScanResult, options: OutputOptions) -> Dict[str, str]:
        """Returns {'json'|'html'|'badge': written path} for each file produced."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        outputs: Dict[str, str] = {}

        if options.generate_json:
            outputs["json"] = self._atomic_write(JSON_REPORT_NAME, to_json(result))
        if options.generate_html:
            outputs["html"] = self._atomic_write(HTML_REPORT_NAME, render_html(result))
        if options.generate_badge:
            outputs["badge"] = self._atomic_write(BADGE_NAME, render_badge(result.score))

        return outputs

    def _atomic_write(self, name: str, content: str) -> str:
        target = self.output_dir / name
        temp_file = target.with_name(target.name + ".tmp")
        try:
            temp_file.write_text(content, encoding="utf-8")
            os.replace(temp_file, target)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise
        logger.debug("Wrote %s", target)
        return str(target)
