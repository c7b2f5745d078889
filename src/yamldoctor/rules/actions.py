#!/usr/bin/env python3
"""
YAML-DOCTOR GITHUB ACTIONS RULES
--------------------------------
Structural checks for workflow files under .github/workflows/.
A missing 'jobs' mapping stops the job checks, but the trigger ('on')
check always runs.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import re
from typing import Any, List

from yamldoctor.core.models import Issue, Severity
from yamldoctor.rules.base import RuleSet, get_field, is_mapping, is_sequence, make_issue, truthy

# '@' then optional 'v' then 1-3 numeric dot components at the very end
# (\Z, not $: a trailing newline from a block scalar is not a pin)
PINNED_VERSION = re.compile(r"@v?\d+(\.\d+)?(\.\d+)?\Z")


class ActionsRules(RuleSet):
    """Jobs, steps, runner and trigger checks."""

    name = "github-actions"

    def evaluate(self, doc: Any) -> List[Issue]:
        issues: List[Issue] = []

        jobs = get_field(doc, "jobs")
        if not is_mapping(jobs):
            issues.append(make_issue(Severity.ERROR, "gha.missingJobs", 'Missing "jobs" field'))
        else:
            for job_name, job in jobs.items():
                if not is_mapping(job):
                    continue
                issues.extend(self._check_job(str(job_name), job))

        if not truthy(get_field(doc, "on")):
            issues.append(make_issue(Severity.INFO, "gha.missingOn", 'Missing "on" field (triggers)'))

        return issues

    def _check_job(self, job_name: str, job: dict) -> List[Issue]:
        steps = job.get("steps")
        if not truthy(steps):
            return [make_issue(Severity.WARN, "gha.missingSteps", f'Job "{job_name}" without "steps"')]

        issues: List[Issue] = []
        if is_sequence(steps):
            for index, step in enumerate(steps, 1):
                issues.extend(self._check_step(job_name, index, step))

        if not truthy(job.get("runs-on")):
            issues.append(make_issue(Severity.WARN, "gha.missingRunsOn", f'Job "{job_name}" without "runs-on"'))
        return issues

    def _check_step(self, job_name: str, index: int, step: Any) -> List[Issue]:
        issues: List[Issue] = []
        uses = get_field(step, "uses")
        run = get_field(step, "run")

        if not truthy(uses) and not truthy(run):
            issues.append(make_issue(Severity.WARN, "gha.stepNoUsesOrRun",
                                     f'Job "{job_name}", step {index}: use "uses" or "run"'))

        if isinstance(uses, str) and uses and not PINNED_VERSION.search(uses):
            issues.append(make_issue(Severity.INFO, "gha.pinVersion",
                                     f'Job "{job_name}", step {index}: pin version (e.g. @v4)'))
        return issues
