"""Tests for subprocess execution."""

from pathlib import Path

import pytest

from licensectl.domain.errors import ExternalToolFailure
from licensectl.infrastructure.process import run_command
from tests.conftest import py_command


class TestRunCommand:
    def test_captures_stdout(self) -> None:
        out = run_command(py_command("print('code license body')"))
        assert out == "code license body\n"

    def test_working_directory(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("found", encoding="utf-8")
        out = run_command(
            py_command("print(open('marker.txt').read(), end='')"),
            cwd=tmp_path,
        )
        assert out == "found"

    def test_stderr_not_in_output(self) -> None:
        out = run_command(py_command("import sys; sys.stderr.write('noise'); print('ok')"))
        assert out == "ok\n"

    def test_non_zero_exit(self) -> None:
        argv = py_command("import sys; sys.stderr.write('crate scan failed\\n'); sys.exit(3)")
        with pytest.raises(ExternalToolFailure) as exc_info:
            run_command(argv, section="CODE LICENSES")
        exc = exc_info.value
        assert exc.section == "CODE LICENSES"
        assert exc.detail["returncode"] == 3
        assert exc.detail["stderr"] == "crate scan failed"
        assert "crate scan failed" in exc.message

    def test_missing_executable(self) -> None:
        with pytest.raises(ExternalToolFailure, match="Cannot launch"):
            run_command(["definitely-not-a-real-tool-xyz", "--version"])

    def test_timeout(self) -> None:
        with pytest.raises(ExternalToolFailure, match="timed out"):
            run_command(py_command("import time; time.sleep(5)"), timeout=0.2)

    def test_non_utf8_stdout(self) -> None:
        argv = py_command("import sys; sys.stdout.buffer.write(b'\\xff\\xfe')")
        with pytest.raises(ExternalToolFailure, match="UTF-8"):
            run_command(argv)
