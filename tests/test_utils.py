"""Unit tests for utility functions (src.utils).

Tests cover:
- run_command (success, failure, cwd, missing executable, capture=False)
- format_command
- sanitize_name (various inputs)
- write_text
- Rich output helpers (print_header, print_summary_table, etc.)
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from src.utils import (
    format_command,
    print_error,
    print_header,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    sanitize_name,
    write_text,
)

PYTHON = sys.executable


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command(["echo", "hello"])
        assert returncode == 0
        assert "hello" in stdout

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_arguments_not_shell_expanded(self):
        returncode, stdout, stderr = await run_command(["echo", "$HOME && ls"])
        assert returncode == 0
        assert stdout == "$HOME && ls"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, stdout, stderr = await run_command(
            [PYTHON, "-c", "import sys; sys.exit(3)"]
        )
        assert returncode == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, stderr = await run_command(
            [PYTHON, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout.strip()).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable_raises(self):
        with pytest.raises(FileNotFoundError):
            await run_command(["nonexistent-binary-12345-xyz"])

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_capture_returns_empty_strings(self):
        returncode, stdout, stderr = await run_command(
            [PYTHON, "-c", "pass"], capture=False
        )
        assert returncode == 0
        assert stdout == ""
        assert stderr == ""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_returns_stderr(self):
        returncode, stdout, stderr = await run_command(
            [PYTHON, "-c", "import sys; sys.stderr.write('error_msg\\n')"]
        )
        assert "error_msg" in stderr


class TestFormatCommand:
    @pytest.mark.unit
    def test_joins_arguments(self):
        assert format_command(["npm", "install", "express"]) == "npm install express"


# ---------------------------------------------------------------------------
# sanitize_name
# ---------------------------------------------------------------------------


class TestSanitizeName:
    @pytest.mark.unit
    def test_simple_name(self):
        assert sanitize_name("My Awesome API") == "my-awesome-api"

    @pytest.mark.unit
    def test_special_chars(self):
        assert sanitize_name("  Shop (v2)  ") == "shop-v2"

    @pytest.mark.unit
    def test_npm_safe_characters_preserved(self):
        assert sanitize_name("my_api.v2-beta") == "my_api.v2-beta"

    @pytest.mark.unit
    def test_scope_characters_replaced(self):
        assert sanitize_name("@acme/api") == "acme-api"

    @pytest.mark.unit
    def test_consecutive_hyphens_collapsed(self):
        assert sanitize_name("a - - b") == "a-b"

    @pytest.mark.unit
    def test_leading_trailing_hyphens_stripped(self):
        assert sanitize_name("---api---") == "api"

    @pytest.mark.unit
    def test_empty_string(self):
        assert sanitize_name("") == ""


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestWriteText:
    @pytest.mark.unit
    def test_creates_parents(self, tmp_path: Path):
        target = tmp_path / "src" / "app.js"
        result = write_text(target, "export {};\n")
        assert result == target
        assert target.read_text(encoding="utf-8") == "export {};\n"

    @pytest.mark.unit
    def test_overwrites(self, tmp_path: Path):
        target = tmp_path / ".env"
        write_text(target, "A=1\n")
        write_text(target, "B=2\n")
        assert target.read_text(encoding="utf-8") == "B=2\n"


# ---------------------------------------------------------------------------
# Rich output helpers (smoke tests - verify they don't raise)
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_header(self):
        print_header("Done")

    @pytest.mark.unit
    def test_print_summary_table(self):
        print_summary_table({"Project": "api", "cors": "yes"}, title="Selections")

    @pytest.mark.unit
    def test_print_step(self, capsys):
        print_step("Writing src/app.js")
        assert "Writing src/app.js" in capsys.readouterr().out

    @pytest.mark.unit
    def test_print_success(self):
        print_success("Created")

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning(self):
        print_warning("Install failed")
