"""Every layer must import cleanly on its own, whatever gets imported first.

Each case runs in a fresh interpreter so modules already loaded by the test
session cannot hide an import cycle.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

pytestmark = pytest.mark.unit

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.mark.parametrize(
    "module",
    [
        "src.teamhub.repositories",
        "src.teamhub.schemas",
        "src.teamhub.services",
        "src.teamhub.services.file_tree",
        "src.teamhub.api.dependencies",
        "src.teamhub.main",
    ],
)
def test_module_imports_first(module: str) -> None:
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=PROJECT_ROOT,
        env={**os.environ, "PYTHONPATH": str(PROJECT_ROOT)},
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
