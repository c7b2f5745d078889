"""Rule set for documents that match no known file type."""

from typing import Any, List

from yamldoctor.core.models import Issue
from yamldoctor.rules.base import RuleSet


class GenericRules(RuleSet):
    """Generic YAML only gets the style checks, which the engine runs for every file."""

    name = "generic"

    def evaluate(self, doc: Any) -> List[Issue]:
        return []
