#!/usr/bin/env python3
"""
YAML-DOCTOR ENGINE - The Scan Orchestrator
------------------------------------------
Drives every candidate file through the same fixed sequence:

1. Read the raw text (unreadable files are skipped)
2. Style rules on the raw text
3. Parse (a failure becomes one 'yaml.parse' error, type 'generic')
4. Type detection and the matching structural rule set

then aggregates severity totals and the 0-100 score across all files.
Files share no state during evaluation, so they may be processed on a
bounded thread pool; results are always put back into discovery order.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Any, List, Optional

from yamldoctor.core.discovery import FileCollector
from yamldoctor.core.loader import YamlLoader, YamlLoadError
from yamldoctor.core.models import (
    FileResult,
    FileType,
    Issue,
    OutputOptions,
    ScanOptions,
    ScanResult,
    Severity,
    compute_score,
    count_severities,
)
from yamldoctor.report.writer import ReportWriter
from yamldoctor.rules.actions import ActionsRules
from yamldoctor.rules.base import RuleSet
from yamldoctor.rules.compose import ComposeRules
from yamldoctor.rules.detector import detect_type
from yamldoctor.rules.generic import GenericRules
from yamldoctor.rules.kubernetes import KubernetesRules
from yamldoctor.rules.style import StyleRules

logger = logging.getLogger("yamldoctor.engine")


class YamlDoctorEngine:
    """
    Principal orchestrator for a scan.

    The file enumerator and YAML loader are collaborators and can be
    swapped out (e.g. in tests); everything else is fixed.
    """

    def __init__(self, options: Optional[ScanOptions] = None,
                 collector: Optional[Any] = None, loader: Optional[YamlLoader] = None):
        self.options = options or ScanOptions()
        self.collector = collector or FileCollector(
            self.options.ignore_patterns,
            respect_gitignore=self.options.respect_gitignore,
        )
        self.loader = loader or YamlLoader(self.options.max_alias_count)
        self.style = StyleRules()

        # One handler per file type
        self.rule_sets: Dict[FileType, RuleSet] = {
            FileType.GENERIC: GenericRules(),
            FileType.DOCKER_COMPOSE: ComposeRules(),
            FileType.GITHUB_ACTIONS: ActionsRules(),
            FileType.KUBERNETES: KubernetesRules(),
        }

    def scan(self, root_path: str) -> ScanResult:
        """Scans a directory tree and returns the aggregate result."""
        root = Path(root_path).resolve()
        files = self.collector.collect(root)
        logger.debug("Scanning %d files under %s", len(files), root)

        results = self._process_all(files, root)

        totals = count_severities(issue for r in results for issue in r.issues)
        score = compute_score(totals)
        logger.debug(
            "Scan of %s complete: score=%d errors=%d warnings=%d info=%d",
            root, score, totals[Severity.ERROR], totals[Severity.WARN], totals[Severity.INFO],
        )
        return ScanResult(root=str(root), files=results, totals=totals, score=score)

    def scan_and_report(self, root_path: str,
                        output: Optional[OutputOptions] = None) -> Dict[str, Any]:
        """
        Scans, then writes the requested reports.
        Returns {'result': ScanResult, 'outputs': {kind: path}}.
        """
        output = output or OutputOptions()
        result = self.scan(root_path)
        writer = ReportWriter(output.output_dir or result.root)
        outputs = writer.write(result, output)
        return {"result": result, "outputs": outputs}

    def _process_all(self, files: List[Path], root: Path) -> List[FileResult]:
        workers = min(max(int(self.options.workers or 1), 1), len(files) or 1)

        if workers == 1:
            processed = [self.scan_file(path, root) for path in files]
        else:
            # Index-mapped so results land in discovery order regardless of completion order
            processed = [None] * len(files)
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self.scan_file, path, root): index
                    for index, path in enumerate(files)
                }
                for future, index in futures.items():
                    processed[index] = future.result()

        return [r for r in processed if r is not None]

    def scan_file(self, path: Path, root: Path) -> Optional[FileResult]:
        """Evaluates a single file. Returns None when it cannot be read."""
        rel_path = self._relative(path, root)
        text = self._read_text(path)
        if text is None:
            return None

        issues: List[Issue] = self.style.check(text)

        try:
            doc = self.loader.load(text)
        except YamlLoadError as e:
            logger.debug("Parse failure in %s: %s", rel_path, e)
            issues.append(Issue(Severity.ERROR, "yaml.parse", f"Error parsing YAML: {e}"))
            return FileResult(path=rel_path, type=FileType.GENERIC, issues=issues)

        file_type = detect_type(rel_path, doc)
        issues.extend(self.rule_sets[file_type].evaluate(doc))
        return FileResult(path=rel_path, type=file_type, issues=issues)

    def _read_text(self, path: Path) -> Optional[str]:
        # Bytes are decoded by hand so '\r' survives for the line checks
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", path, e)
            return None
        return raw.decode("utf-8-sig", errors="replace")

    @staticmethod
    def _relative(path: Path, root: Path) -> str:
        try:
            return Path(path).relative_to(root).as_posix()
        except ValueError:
            return Path(os.path.relpath(path, root)).as_posix()


def scan(root_path: str, options: Optional[ScanOptions] = None) -> ScanResult:
    """Convenience entry point: one engine, one scan."""
    return YamlDoctorEngine(options).scan(root_path)
