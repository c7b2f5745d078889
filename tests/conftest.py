import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path):
    """Writes {relative_path: text} under tmp_path and returns the root."""
    def _make(files):
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path
    return _make
