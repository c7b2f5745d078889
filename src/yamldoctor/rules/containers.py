#!/usr/bin/env python3
"""
YAML-DOCTOR CONTAINER FINDER
----------------------------
Pods, Deployments, Jobs, CronJobs and friends all nest their container
specs at different depths. Rather than hard-coding each workload shape,
the finder walks the whole manifest and records every element of every
'containers' sequence it meets, together with a JSONPath-like location
used in finding messages (e.g. '$.spec.template.spec.containers[0]').

Author: yaml-doctor Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from yamldoctor.rules.base import get_field, is_mapping, is_sequence, truthy

ROOT_PATH = "$"


@dataclass(frozen=True)
class Container:
    """
    The fields of a container spec the kubernetes rules care about.
    Probes are presence-only checks.
    """
    image: Any = None
    limits: Any = None
    has_liveness_probe: bool = False
    has_startup_probe: bool = False

    @classmethod
    def from_node(cls, node: Any) -> "Container":
        # Non-mapping entries behave like an empty container spec
        resources = get_field(node, "resources")
        return cls(
            image=get_field(node, "image"),
            limits=get_field(resources, "limits"),
            has_liveness_probe=truthy(get_field(node, "livenessProbe")),
            has_startup_probe=truthy(get_field(node, "startupProbe")),
        )


@dataclass(frozen=True)
class LocatedContainer:
    container: Container
    path: str


class ContainerFinder:
    """Depth-first walk in key/index order."""

    def find(self, doc: Any) -> List[LocatedContainer]:
        found: List[LocatedContainer] = []
        self._walk(doc, ROOT_PATH, found)
        return found

    def _walk(self, node: Any, path: str, found: List[LocatedContainer]) -> None:
        if is_mapping(node):
            containers = node.get("containers")
            if is_sequence(containers):
                for index, item in enumerate(containers):
                    found.append(LocatedContainer(Container.from_node(item), f"{path}.containers[{index}]"))
            children = node.items()
        elif is_sequence(node):
            # Sequences are walked structurally; their indices become path segments
            children = enumerate(node)
        else:
            return

        # The walk keeps going below 'containers' too
        for key, value in children:
            self._walk(value, f"{path}.{key}", found)


def find_containers(doc: Any, finder: Optional[ContainerFinder] = None) -> List[LocatedContainer]:
    return (finder or ContainerFinder()).find(doc)
