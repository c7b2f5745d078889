import json
from pathlib import Path

import pytest

from yamldoctor.core.engine import YamlDoctorEngine, scan
from yamldoctor.core.models import (
    FileType,
    Issue,
    ScanOptions,
    Severity,
    compute_score,
    count_severities,
)

COMPOSE = """\
services:
  web:
    image: nginx:latest
"""

WORKFLOW = """\
jobs:
  build:
    steps:
      - run: echo hi
"""

POD = """\
apiVersion: v1
kind: Pod
metadata:
  name: web
spec:
  containers:
    - name: app
      image: app:latest
"""

CLEAN = """\
name: settings
values:
  - 1
  - 2
"""


def test_end_to_end_scan(make_tree):
    root = make_tree({
        "docker-compose.yml": COMPOSE,
        ".github/workflows/ci.yml": WORKFLOW,
        "k8s/pod.yaml": POD,
        "config.yaml": CLEAN,
    })
    result = scan(str(root))

    assert result.root == str(Path(root).resolve())
    assert [(f.path, f.type) for f in result.files] == [
        (".github/workflows/ci.yml", FileType.GITHUB_ACTIONS),
        ("config.yaml", FileType.GENERIC),
        ("docker-compose.yml", FileType.DOCKER_COMPOSE),
        ("k8s/pod.yaml", FileType.KUBERNETES),
    ]
    by_path = {f.path: [i.code for i in f.issues] for f in result.files}
    assert by_path["config.yaml"] == []
    assert by_path["docker-compose.yml"] == ["compose.latestTag", "compose.restart"]
    assert by_path[".github/workflows/ci.yml"] == ["gha.missingRunsOn", "gha.missingOn"]
    assert by_path["k8s/pod.yaml"] == ["k8s.latestTag", "k8s.limits", "k8s.probes"]

    # warn: latestTag, missingRunsOn, k8s.latestTag, k8s.limits ; info: restart, missingOn, probes
    assert result.totals == {Severity.ERROR: 0, Severity.WARN: 4, Severity.INFO: 3}
    assert result.score == 100 - 4 * 4 - 3


def test_parse_failure_is_single_issue(make_tree):
    """
    A broken document yields exactly one yaml.parse error, typed generic,
    even when its path would otherwise classify it as a workflow.
    """
    root = make_tree({".github/workflows/broken.yml": "jobs: [unclosed\n"})
    result = scan(str(root))

    f = result.files[0]
    assert f.type is FileType.GENERIC
    assert [(i.severity, i.code) for i in f.issues] == [(Severity.ERROR, "yaml.parse")]
    assert f.issues[0].message.startswith("Error parsing YAML: ")
    assert result.score == 88


def test_style_issues_come_before_parse_issue(make_tree):
    root = make_tree({"bad.yml": "a: [1, \nb:\t2\n"})
    issues = scan(str(root)).files[0].issues
    assert [i.code for i in issues][-1] == "yaml.parse"
    assert [i.code for i in issues][:-1] == ["style.trailingSpace", "style.tabs"]
    assert issues[0].line == 1


def test_style_issues_precede_type_issues(make_tree):
    root = make_tree({"docker-compose.yml": "services: \n  web:\n    image: nginx:latest\n"})
    issues = scan(str(root)).files[0].issues
    assert [i.code for i in issues] == ["style.trailingSpace", "compose.latestTag", "compose.restart"]


def test_empty_tree(tmp_path):
    result = scan(str(tmp_path))
    assert result.files == []
    assert result.score == 100
    assert result.to_dict()["totals"] == {"error": 0, "warn": 0, "info": 0}


def test_score_floors_at_zero(make_tree):
    root = make_tree({f"broken{i}.yml": "x: [\n" for i in range(10)})
    result = scan(str(root))
    assert result.totals[Severity.ERROR] == 10
    assert result.score == 0


@pytest.mark.parametrize("errors,warns,infos", [
    (0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1), (2, 3, 5), (8, 1, 0), (9, 0, 0), (0, 30, 7),
])
def test_score_formula(errors, warns, infos):
    issues = (
        [Issue(Severity.ERROR, "e", "e")] * errors
        + [Issue(Severity.WARN, "w", "w")] * warns
        + [Issue(Severity.INFO, "i", "i")] * infos
    )
    score = compute_score(count_severities(reversed(issues)))
    assert score == max(0, 100 - 12 * errors - 4 * warns - infos)
    assert 0 <= score <= 100


def test_totals_match_file_issues(make_tree):
    root = make_tree({"a.yml": COMPOSE, "b.yaml": POD, "c.yml": "x: [\n", "d.yml": "k: v \t\n"})
    result = scan(str(root))
    recount = count_severities(i for f in result.files for i in f.issues)
    assert result.totals == recount
    assert sum(result.totals.values()) == len(result.issues)


def test_scan_is_idempotent(make_tree):
    root = make_tree({"a.yml": COMPOSE, "b.yaml": POD, ".github/workflows/x.yml": WORKFLOW})
    first = json.dumps(scan(str(root)).to_dict(), sort_keys=False)
    second = json.dumps(scan(str(root)).to_dict(), sort_keys=False)
    assert first == second


def test_worker_pool_preserves_discovery_order(make_tree):
    files = {f"f{i:02d}.yml": (COMPOSE if i % 2 else POD) for i in range(20)}
    root = make_tree(files)

    sequential = scan(str(root)).to_dict()
    parallel = scan(str(root), ScanOptions(workers=8)).to_dict()
    assert parallel == sequential
    assert [f["path"] for f in parallel["files"]] == sorted(files)


def test_unreadable_files_are_skipped(make_tree):
    root = make_tree({"a.yml": COMPOSE})

    class Collector:
        def collect(self, root_path):
            return [Path(root_path) / "a.yml", Path(root_path) / "missing.yml"]

    result = YamlDoctorEngine(collector=Collector()).scan(str(root))
    assert [f.path for f in result.files] == ["a.yml"]


def test_collector_is_injectable(make_tree):
    root = make_tree({"one.yml": CLEAN, "two.yml": COMPOSE})

    class Reversed:
        def collect(self, root_path):
            return sorted(Path(root_path).glob("*.yml"), reverse=True)

    result = YamlDoctorEngine(collector=Reversed()).scan(str(root))
    assert [f.path for f in result.files] == ["two.yml", "one.yml"]


def test_collaborator_failure_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan(str(tmp_path / "does-not-exist"))


def test_invalid_utf8_is_still_scanned(make_tree):
    root = make_tree({"latin.yml": b"name: caf\xe9\n"})
    result = scan(str(root))
    assert [f.path for f in result.files] == ["latin.yml"]
    assert result.files[0].type is FileType.GENERIC


def test_alias_bomb_reports_parse_error(make_tree):
    lines = ['a: &a ["x","x","x","x","x","x","x","x"]']
    prev = "a"
    for name in "bcdefg":
        lines.append(f"{name}: &{name} [" + ",".join(f"*{prev}" for _ in range(8)) + "]")
        prev = name
    root = make_tree({"bomb.yaml": "\n".join(lines) + "\n"})
    issues = scan(str(root)).files[0].issues
    assert [i.code for i in issues] == ["yaml.parse"]
    assert "alias" in issues[0].message


def test_json_shape(make_tree):
    root = make_tree({"a.yml": "k: v \n"})
    data = scan(str(root)).to_dict()
    assert set(data) == {"root", "files", "totals", "score"}
    assert data["files"][0] == {
        "path": "a.yml",
        "type": "generic",
        "issues": [{
            "severity": "info",
            "code": "style.trailingSpace",
            "message": "Trailing whitespace at end of line",
            "line": 1,
        }],
    }
    assert data["score"] == 99


def test_constructor_failure_does_not_abort_scan(make_tree):
    root = make_tree({
        "a.yml": "flag: !!bool maybe\n",
        "b.yml": "k: v\n",
        "deep.yml": "[" * 3000 + "]" * 3000,
    })
    result = scan(str(root))

    by_path = {f.path: [i.code for i in f.issues] for f in result.files}
    assert by_path == {"a.yml": ["yaml.parse"], "b.yml": [], "deep.yml": ["style.lineLength", "yaml.parse"]}
    assert result.score == 100 - 2 * 12 - 1


def test_bom_is_not_counted_in_line_length(make_tree):
    root = make_tree({"bom.yml": b"\xef\xbb\xbf" + b"k: " + b"v" * 157 + b"\n"})
    assert scan(str(root)).files[0].issues == []
