"""Entry points must import cleanly in a fresh interpreter."""

import subprocess
import sys

import pytest


@pytest.mark.parametrize("module", [
    "snakedraft.core.analysis",
    "snakedraft.core.draft",
    "snakedraft.core.draft.recorder",
    "snakedraft.api.main",
    "snakedraft.api.services.draft_service",
    "snakedraft.__main__",
])
def test_module_imports_first(module):
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
