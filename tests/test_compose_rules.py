from yamldoctor.core.models import Severity
from yamldoctor.rules.compose import ComposeRules


def run(doc):
    return [(i.severity, i.code) for i in ComposeRules().evaluate(doc)]


def test_latest_image_without_restart():
    """An image is present, so only the tag and restart checks fire."""
    assert run({"services": {"web": {"image": "nginx:latest"}}}) == [
        (Severity.WARN, "compose.latestTag"),
        (Severity.INFO, "compose.restart"),
    ]


def test_missing_services_short_circuits():
    issues = ComposeRules().evaluate({"version": "3"})
    assert [(i.severity, i.code) for i in issues] == [(Severity.ERROR, "compose.missingServices")]


def test_non_mapping_services_is_missing():
    assert run({"services": ["web", "db"]}) == [(Severity.ERROR, "compose.missingServices")]
    assert run({"services": None}) == [(Severity.ERROR, "compose.missingServices")]


def test_empty_services_mapping_is_fine():
    assert run({"services": {}}) == []


def test_non_mapping_entries_are_skipped():
    assert run({"services": {"a": None, "b": "text", "c": {"image": "x:1", "restart": "always"}}}) == []


def test_build_satisfies_image_or_build():
    assert run({"services": {"app": {"build": ".", "restart": "unless-stopped"}}}) == []


def test_neither_image_nor_build():
    issues = ComposeRules().evaluate({"services": {"worker": {"restart": "always"}}})
    assert len(issues) == 1
    assert issues[0].code == "compose.imageOrBuild"
    assert '"worker"' in issues[0].message


def test_non_string_image_counts_as_missing():
    assert [c for _, c in run({"services": {"w": {"image": 5, "restart": "always"}}})] == ["compose.imageOrBuild"]


def test_falsy_restart_values_are_absent():
    for value in (False, 0, "", None):
        assert run({"services": {"w": {"image": "x:1", "restart": value}}}) == [(Severity.INFO, "compose.restart")]


def test_services_keep_document_order():
    doc = {"services": {"zeta": {"image": "z:latest"}, "alpha": {}}}
    messages = [i.message for i in ComposeRules().evaluate(doc)]
    assert messages == [
        'Service "zeta" uses "latest" tag (non-deterministic)',
        'Service "zeta" without "restart" policy',
        'Service "alpha" without "image" or "build"',
        'Service "alpha" without "restart" policy',
    ]
