#!/usr/bin/env python3
"""
YAML-DOCTOR TYPE DETECTOR
-------------------------
Classifies a parsed document so the engine can pick the matching rule
set. Path hints win over content: a workflow file is recognised before
its structure is looked at.

Author: yaml-doctor Team
Date: 2026-10-19
"""

from typing import Any

from yamldoctor.core.models import FileType
from yamldoctor.rules.base import is_mapping

WORKFLOW_SEGMENT = ".github/workflows/"


def detect_type(rel_path: str, doc: Any) -> FileType:
    """
    First match wins:
    1. path contains '.github/workflows/'   -> github-actions
    2. mapping with a 'services' key         -> docker-compose
    3. mapping with 'apiVersion' and 'kind'  -> kubernetes
    4. anything else                         -> generic
    """
    normalized = rel_path.replace("\\", "/").lower()
    if WORKFLOW_SEGMENT in normalized:
        return FileType.GITHUB_ACTIONS

    if is_mapping(doc):
        if "services" in doc:
            return FileType.DOCKER_COMPOSE
        if "apiVersion" in doc and "kind" in doc:
            return FileType.KUBERNETES

    return FileType.GENERIC
