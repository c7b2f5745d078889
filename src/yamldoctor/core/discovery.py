#!/usr/bin/env python3
"""
YAML-DOCTOR DISCOVERY - File Enumeration
----------------------------------------
Finds every *.yml / *.yaml file below a scan root, dropping anything that
matches the ignore globs or the root .gitignore. Results come back in
lexicographic order of their relative POSIX path so scans are
reproducible across platforms.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import fnmatch
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

logger = logging.getLogger("yamldoctor.discovery")

YAML_SUFFIXES = (".yml", ".yaml")


def relative_posix(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


def load_gitignore(root: Path) -> List[str]:
    """Reads non-blank, non-comment lines of <root>/.gitignore."""
    gitignore = root / ".gitignore"
    patterns: List[str] = []
    try:
        content = gitignore.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return patterns

    for line in content.splitlines():
        line = line.strip()
        # Negations are not supported; skipping them keeps the file ignored
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        patterns.append(line)
    return patterns


def matches_glob(rel_path: str, pattern: str) -> bool:
    """
    fnmatch-based glob test on a forward-slash relative path.

    '*' matches across separators, and a leading '**/' may also match
    at the root ('**/vendor/**' ignores 'vendor/a.yml').
    """
    pattern = pattern.replace("\\", "/")
    if fnmatch.fnmatchcase(rel_path, pattern):
        return True
    if pattern.startswith("**/") and fnmatch.fnmatchcase(rel_path, pattern[3:]):
        return True
    return False


def matches_gitignore(rel_path: str, pattern: str) -> bool:
    pattern = pattern.replace("\\", "/")
    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")

    if pattern.endswith("/"):
        dir_pat = pattern.rstrip("/")
        parts = rel_path.split("/")[:-1]
        if anchored or "/" in dir_pat:
            return rel_path.startswith(dir_pat + "/") or fnmatch.fnmatchcase(rel_path, dir_pat + "/*")
        return any(fnmatch.fnmatchcase(part, dir_pat) for part in parts)

    if anchored or "/" in pattern:
        return fnmatch.fnmatchcase(rel_path, pattern) or fnmatch.fnmatchcase(rel_path, pattern + "/*")

    # Bare names match any path component, file or directory
    return any(fnmatch.fnmatchcase(part, pattern) for part in rel_path.split("/"))


class FileCollector:
    """
    The default file enumerator used by the engine. Anything with a
    `collect(root) -> List[Path]` method can stand in for it.
    """

    def __init__(self, ignore_patterns: Sequence[str], respect_gitignore: bool = True):
        self.ignore_patterns = list(ignore_patterns)
        self.respect_gitignore = respect_gitignore

    def collect(self, root: Path) -> List[Path]:
        root = Path(root).resolve()
        if not root.exists():
            raise FileNotFoundError(f"Scan root not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Scan root is not a directory: {root}")

        gitignore = load_gitignore(root) if self.respect_gitignore else []

        candidates = []
        for path in root.rglob("*"):
            # Symlinks are skipped to avoid loops and files outside the root
            if not path.name.endswith(YAML_SUFFIXES) or path.is_symlink() or not path.is_file():
                continue
            rel = relative_posix(path, root)
            if self._is_ignored(rel, gitignore):
                logger.debug("Ignoring %s", rel)
                continue
            candidates.append((rel, path))

        candidates.sort(key=lambda item: item[0])
        logger.debug("Discovered %d YAML files under %s", len(candidates), root)
        return [path for _, path in candidates]

    def _is_ignored(self, rel_path: str, gitignore: Iterable[str]) -> bool:
        if any(matches_glob(rel_path, p) for p in self.ignore_patterns):
            return True
        return any(matches_gitignore(rel_path, p) for p in gitignore)
