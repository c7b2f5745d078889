#!/usr/bin/env python3
"""
YAML-DOCTOR LOADER - Safe Parsing Gate
--------------------------------------
Turns raw text into plain Python structures (dict/list/scalars) using the
ruamel.yaml safe loader. Any failure is re-raised as YamlLoadError so the
engine can report it as a single 'yaml.parse' finding.

Alias expansion is bounded before construction. Every anchor keeps a
reference count and a weight (the largest expansion reachable through
it); once count * weight for any anchor exceeds `max_alias_count` the
document is rejected, which stops 'billion laughs' style amplification
from reaching the tree walkers.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.nodes import MappingNode, SequenceNode

logger = logging.getLogger("yamldoctor.loader")

DEFAULT_MAX_ALIAS_COUNT = 50

# Raised by the safe constructor and the recursive composer on bad input
# (e.g. '!!bool maybe', very deep nesting) instead of a YAMLError.
CONSTRUCTION_ERRORS = (YAMLError, ValueError, KeyError, TypeError, RecursionError)


class YamlLoadError(Exception):
    """Raised when text cannot be turned into a document."""


class AliasLimitError(YamlLoadError):
    """Raised when alias expansion exceeds the configured bound."""

    def __init__(self, message: str = "Excessive alias count indicates a resource exhaustion attack"):
        super().__init__(message)


@dataclass
class AnchorUsage:
    count: int = 1       # the definition itself counts once
    weight: int = 0      # computed lazily on the first alias


class TagTolerantConstructor(SafeConstructor):
    """
    Safe constructor that builds nodes carrying unknown local tags
    (CloudFormation '!Ref', GitLab '!reference', ...) as plain data
    instead of failing the whole document.
    """

    def construct_unknown_tag(self, node: Any) -> Any:
        if isinstance(node, MappingNode):
            return self.construct_mapping(node, deep=True)
        if isinstance(node, SequenceNode):
            return self.construct_sequence(node, deep=True)
        return self.construct_scalar(node)


TagTolerantConstructor.add_constructor(None, TagTolerantConstructor.construct_unknown_tag)


class YamlLoader:
    """
    Parses a YAML stream and returns its first document.

    Every document in the stream is syntax-checked; only the first is
    returned for classification. Empty input yields None.
    """

    def __init__(self, max_alias_count: int = DEFAULT_MAX_ALIAS_COUNT):
        self.max_alias_count = max_alias_count

    def _new_parser(self) -> YAML:
        # A fresh instance per call: ruamel YAML objects hold parse state
        # and must not be shared across worker threads.
        yaml = YAML(typ="safe", pure=True)
        yaml.Constructor = TagTolerantConstructor
        return yaml

    def load(self, text: str) -> Any:
        try:
            for node in self._new_parser().compose_all(text):
                self._check_aliases(node)
            docs = list(self._new_parser().load_all(text))
        except YamlLoadError as e:
            logger.debug("Rejected YAML stream: %s", e)
            raise
        except RecursionError as e:
            raise YamlLoadError(f"Document nesting too deep: {e}") from e
        except CONSTRUCTION_ERRORS as e:
            raise YamlLoadError(str(e) or type(e).__name__) from e

        if not docs:
            return None
        return docs[0]

    def _check_aliases(self, root: Any) -> None:
        if root is None or self.max_alias_count < 0:
            return
        anchors: Dict[int, AnchorUsage] = {id(root): AnchorUsage()}
        alias_slots: Set[Tuple[int, int]] = set()
        self._walk(root, anchors, alias_slots, {id(root)})

    def _walk(self, node: Any, anchors: Dict[int, AnchorUsage],
              alias_slots: Set[Tuple[int, int]], open_nodes: Set[int]) -> None:
        """
        Visits `node` in document order.

        The composer hands back the anchored node itself for every alias,
        so a node seen a second time is an alias. Aliases are not
        descended into; their slot is recorded for the weight pass.
        """
        for position, child in enumerate(self._children(node)):
            key = id(child)
            usage = anchors.get(key)
            if usage is None:
                anchors[key] = AnchorUsage()
                open_nodes.add(key)
                self._walk(child, anchors, alias_slots, open_nodes)
                open_nodes.discard(key)
                continue

            if key in open_nodes:
                raise AliasLimitError("Recursive alias reference cannot be expanded")
            alias_slots.add((id(node), position))
            usage.count += 1
            if usage.weight == 0:
                usage.weight = self._weight(child, anchors, alias_slots)
            if usage.count * usage.weight > self.max_alias_count:
                raise AliasLimitError()

    def _weight(self, node: Any, anchors: Dict[int, AnchorUsage],
                alias_slots: Set[Tuple[int, int]]) -> int:
        """Scalars weigh 1, collections their heaviest child, aliases count * weight."""
        if not isinstance(node, (MappingNode, SequenceNode)):
            return 1
        weight = 0
        for position, child in enumerate(self._children(node)):
            if (id(node), position) in alias_slots:
                usage = anchors[id(child)]
                child_weight = usage.count * usage.weight
            else:
                child_weight = self._weight(child, anchors, alias_slots)
            weight = max(weight, child_weight)
        return weight

    @staticmethod
    def _children(node: Any) -> Iterable[Any]:
        if isinstance(node, MappingNode):
            for key_node, value_node in node.value:
                yield key_node
                yield value_node
        elif isinstance(node, SequenceNode):
            yield from node.value


def load_yaml(text: str, max_alias_count: int = DEFAULT_MAX_ALIAS_COUNT) -> Any:
    return YamlLoader(max_alias_count).load(text)
