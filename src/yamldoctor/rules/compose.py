#!/usr/bin/env python3
"""
YAML-DOCTOR COMPOSE RULES
-------------------------
Structural checks for docker-compose files. A file without a usable
'services' mapping gets a single error and nothing else.

Author: yaml-doctor Team
Date: 2026-10-19
"""

from typing import Any, List

from yamldoctor.core.models import Issue, Severity
from yamldoctor.rules.base import RuleSet, get_field, has_latest_tag, is_mapping, make_issue, truthy


class ComposeRules(RuleSet):
    """Per-service image/build, tag pinning and restart policy checks."""

    name = "docker-compose"

    def __init__(self):
        # Executed in order against every service mapping
        self.service_rules = [
            self._rule_image_or_build,
            self._rule_latest_tag,
            self._rule_restart_policy,
        ]

    def evaluate(self, doc: Any) -> List[Issue]:
        services = get_field(doc, "services")
        if not is_mapping(services):
            return [make_issue(Severity.ERROR, "compose.missingServices", 'Missing "services" field')]

        issues: List[Issue] = []
        for name, service in services.items():
            # Null or scalar entries are not services
            if not is_mapping(service):
                continue
            for rule in self.service_rules:
                issue = rule(str(name), service)
                if issue:
                    issues.append(issue)
        return issues

    def _rule_image_or_build(self, name: str, service: dict):
        if not isinstance(service.get("image"), str) and not truthy(service.get("build")):
            return make_issue(Severity.WARN, "compose.imageOrBuild",
                              f'Service "{name}" without "image" or "build"')
        return None

    def _rule_latest_tag(self, name: str, service: dict):
        if has_latest_tag(service.get("image")):
            return make_issue(Severity.WARN, "compose.latestTag",
                              f'Service "{name}" uses "latest" tag (non-deterministic)')
        return None

    def _rule_restart_policy(self, name: str, service: dict):
        if not truthy(service.get("restart")):
            return make_issue(Severity.INFO, "compose.restart",
                              f'Service "{name}" without "restart" policy')
        return None
