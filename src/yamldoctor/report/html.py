#!/usr/bin/env python3
"""
YAML-DOCTOR HTML REPORT
-----------------------
Renders a finished ScanResult as a single self-contained HTML page that
sits next to the JSON report and the badge. Pure formatting: nothing
here changes scores or findings.

Author: yaml-doctor Team
Date: 2026-10-19
"""

from html import escape
from typing import List

from yamldoctor.core.models import FileResult, Issue, ScanResult, Severity

JSON_REPORT_NAME = "yaml-doctor-report.json"
HTML_REPORT_NAME = "yaml-doctor-report.html"
BADGE_NAME = "yaml-doctor-badge.svg"

STYLESHEET = """\
body{font:14px system-ui, -apple-system, Segoe UI, Roboto, Ubuntu, Cantarell, Noto Sans, Arial; margin:24px; color:#222}
h1{margin:0 0 4px} .muted{color:#666}
.sum{display:flex;align-items:center;gap:16px;margin:8px 0 24px}
.badge{border:1px solid #ddd;border-radius:6px;padding:8px;background:#fafafa}
.file{margin:16px 0}
ul{padding-left:18px}
.i{margin:4px 0}
.i .sev{font-weight:700;margin-right:6px}
.i.error{color:#b00020} .i.warn{color:#b19600} .i.info{color:#444}
.ok{color:#2e7d32}
code{background:#f5f5f5;padding:1px 4px;border-radius:4px}
small{color:#666}
footer{margin-top:32px;color:#777}
a.btn{display:inline-block;padding:6px 10px;border:1px solid #ddd;border-radius:6px;text-decoration:none}
"""


def _render_issue(issue: Issue) -> str:
    line = f" <em>(line {issue.line})</em>" if issue.line is not None else ""
    sev = issue.severity.value
    return (
        f'<li class="i {sev}"><span class="sev">{sev.upper()}</span> '
        f"{escape(issue.message)}{line} <code>{escape(issue.code)}</code></li>"
    )


def _render_file(file_result: FileResult) -> str:
    items = "".join(_render_issue(issue) for issue in file_result.issues)
    if not items:
        items = '<li class="ok">No issues</li>'
    return (
        f'<section class="file"><h3>{escape(file_result.path)} '
        f"<small>({file_result.type.value})</small></h3><ul>{items}</ul></section>"
    )


def render_html(result: ScanResult) -> str:
    rows: List[str] = [_render_file(f) for f in result.files]
    totals = result.totals

    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>yaml-doctor - report</title>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<style>
{STYLESHEET}</style>
</head>
<body>
<h1>yaml-doctor</h1>
<div class="muted">Scan at: <code>{escape(result.root)}</code> &bull; Files: {len(result.files)}</div>

<div class="sum">
  <div class="badge"><img src="./{BADGE_NAME}" alt="badge"/></div>
  <div>
    <div><b>Score:</b> {result.score}/100</div>
    <div>Errors: {totals.get(Severity.ERROR, 0)} &bull; Warnings: {totals.get(Severity.WARN, 0)} &bull; Info: {totals.get(Severity.INFO, 0)}</div>
    <div style="margin-top:8px">
      <a class="btn" href="./{JSON_REPORT_NAME}" download>Download JSON</a>
      <a class="btn" href="./{BADGE_NAME}" download>Download badge</a>
    </div>
  </div>
</div>

{"".join(rows)}

<footer>
  <p>Tip: post the badge image and tag <code>#yaml</code> <code>#kubernetes</code> <code>#docker</code> <code>#devops</code>.</p>
</footer>
</body>
</html>"""
