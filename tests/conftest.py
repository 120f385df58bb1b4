"""Test configuration and fixtures for dir2setup."""

import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest


@pytest.fixture
def sample_project(tmp_path):
    """A small full-stack project with excluded dependency and database folders."""
    root = tmp_path / "project"
    (root / "frontend" / "node_modules" / "vue").mkdir(parents=True)
    (root / "backend" / "database").mkdir(parents=True)
    (root / "frontend" / "package.json").write_text("{}")
    (root / "frontend" / "node_modules" / "vue" / "index.js").write_text("module.exports = {}")
    (root / "backend" / "server.js").write_text("console.log(1)")
    (root / "backend" / "database" / "schema.sql").write_text("CREATE TABLE services (id INTEGER);")
    return root


@pytest.fixture
def python_command():
    """Build a shell command running a Python one-liner with the current interpreter."""

    def build(code: str) -> str:
        return f'"{sys.executable}" -c "{code}"'

    return build


@pytest.fixture
def run_script():
    """Run a generated Python setup script inside a target directory."""

    def run(script_path: Path, cwd: Path, **env: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, str(script_path)],
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=120,
            env={**os.environ, **env},
        )

    return run


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo logging configuration done by CLI entry points so caplog keeps working."""
    package_logger = logging.getLogger("dir2setup")
    handlers, level, propagate = list(package_logger.handlers), package_logger.level, package_logger.propagate
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
