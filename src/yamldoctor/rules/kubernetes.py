#!/usr/bin/env python3
"""
YAML-DOCTOR KUBERNETES RULES
----------------------------
Identity checks on the manifest root followed by per-container checks
for every container located by the ContainerFinder. None of the checks
short-circuit each other.

Author: yaml-doctor Team
Date: 2026-10-19
"""

from typing import Any, List, Optional

from yamldoctor.core.models import Issue, Severity
from yamldoctor.rules.base import RuleSet, get_field, has_latest_tag, is_mapping, make_issue, truthy
from yamldoctor.rules.containers import ContainerFinder, LocatedContainer


class KubernetesRules(RuleSet):
    """
    Registry-driven like the other rule sets: identity rules see the whole
    document, container rules see one located container at a time.
    """

    name = "kubernetes"

    def __init__(self, finder: Optional[ContainerFinder] = None):
        self.finder = finder or ContainerFinder()

        self.identity_rules = [
            self._rule_api_version,
            self._rule_kind,
            self._rule_metadata_name,
        ]
        self.container_rules = [
            self._rule_image,
            self._rule_latest_tag,
            self._rule_resource_limits,
            self._rule_probes,
        ]

    def evaluate(self, doc: Any) -> List[Issue]:
        issues: List[Issue] = []

        for rule in self.identity_rules:
            issue = rule(doc)
            if issue:
                issues.append(issue)

        for located in self.finder.find(doc):
            for rule in self.container_rules:
                issue = rule(located)
                if issue:
                    issues.append(issue)

        return issues

    # --- Identity ---

    def _rule_api_version(self, doc: Any):
        if not truthy(get_field(doc, "apiVersion")):
            return make_issue(Severity.ERROR, "k8s.apiVersion", "Missing apiVersion")
        return None

    def _rule_kind(self, doc: Any):
        if not truthy(get_field(doc, "kind")):
            return make_issue(Severity.ERROR, "k8s.kind", "Missing kind")
        return None

    def _rule_metadata_name(self, doc: Any):
        metadata = get_field(doc, "metadata")
        if not is_mapping(metadata) or not truthy(metadata.get("name")):
            return make_issue(Severity.ERROR, "k8s.metadata", "Missing metadata.name")
        return None

    # --- Containers ---

    def _rule_image(self, located: LocatedContainer):
        if not truthy(located.container.image):
            return make_issue(Severity.WARN, "k8s.image", f'{located.path}: container without "image"')
        return None

    def _rule_latest_tag(self, located: LocatedContainer):
        if has_latest_tag(located.container.image):
            return make_issue(Severity.WARN, "k8s.latestTag", f'{located.path}: image uses "latest" tag')
        return None

    def _rule_resource_limits(self, located: LocatedContainer):
        if not truthy(located.container.limits):
            return make_issue(Severity.WARN, "k8s.limits", f'{located.path}: define "resources.limits"')
        return None

    def _rule_probes(self, located: LocatedContainer):
        container = located.container
        if not container.has_liveness_probe and not container.has_startup_probe:
            return make_issue(Severity.INFO, "k8s.probes", f"{located.path}: consider liveness/startup probes")
        return None
