"""Integration tests for the schwartz-ddl command line.

These tests verify that:
1. The generator runs as a module in a fresh interpreter
2. Written scripts land where --output points
3. Failures surface as a non-zero exit code

Run with: pytest tests/test_cli.py -v
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

pytestmark = [
    pytest.mark.integration,
]


def _run(project_root: str, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "schwartz_ddl.generate_ddl", *args],
        cwd=project_root,
        capture_output=True,
        text=True,
        timeout=60,
    )


class TestGenerateDdlScript:
    """Tests for `python -m schwartz_ddl.generate_ddl`."""

    def test_help(self, project_root: str) -> None:
        """Help text lists the options."""
        result = _run(project_root, "--help")
        assert result.returncode == 0
        assert "--dialect" in result.stdout
        assert "--verify" in result.stdout

    def test_dry_run(self, project_root: str) -> None:
        """Dry run prints the script."""
        result = _run(project_root, "--dialect", "oracle", "--dry-run")
        assert result.returncode == 0
        assert "Would write 11 table(s) for oracle" in result.stdout
        assert "CREATE TABLE QRTZ_JOB_DETAILS (" in result.stdout

    def test_writes_output(self, project_root: str, tmp_path: Path) -> None:
        """Script is written to --output."""
        output = tmp_path / "nested" / "quartz.sql"
        result = _run(project_root, "--dialect", "sqlite", "--verify", "-o", str(output))
        assert result.returncode == 0, result.stdout + result.stderr
        assert output.exists()
        assert "OK: script verified" in result.stdout

    def test_unsupported_dialect(self, project_root: str) -> None:
        """Unknown dialects fail with exit code 1."""
        result = _run(project_root, "--dialect", "h2", "--dry-run")
        assert result.returncode == 1
        assert "Unsupported dialect" in result.stdout

    def test_list_dialects(self, project_root: str) -> None:
        result = _run(project_root, "--list-dialects")
        assert result.returncode == 0
        assert result.stdout.split() == ["postgresql", "mysql", "mssql", "oracle", "sqlite"]
