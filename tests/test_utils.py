"""Unit tests for create_dapp.utils."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from create_dapp.utils import (
    StepSpinner,
    copy_path,
    dump_json,
    format_duration,
    load_json,
    remove_path,
    run_command,
    save_json,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_captures_output(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nonzero_exit(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(5)"], timeout=1
        )
        assert returncode == -1
        assert "timed out after 1s" in stderr


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


class TestJson:
    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo"}')
        assert load_json(path) == {"name": "demo"}

    @pytest.mark.unit
    def test_load_json_rejects_non_object(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="Expected a JSON object"):
            load_json(path)

    @pytest.mark.unit
    def test_load_json_invalid(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    @pytest.mark.unit
    def test_dump_json_format(self):
        assert dump_json({"b": 1, "a": "é"}) == '{\n  "b": 1,\n  "a": "é"\n}\n'

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_save_json(self, tmp_path: Path):
        path = tmp_path / "out.json"
        await save_json({"name": "demo"}, path)
        assert path.read_text(encoding="utf-8") == '{\n  "name": "demo"\n}\n'


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestPaths:
    @pytest.mark.unit
    def test_copy_file_creates_parents(self, tmp_path: Path):
        src = tmp_path / "a.txt"
        src.write_text("a")
        copy_path(src, tmp_path / "x" / "y" / "a.txt")
        assert (tmp_path / "x" / "y" / "a.txt").read_text() == "a"

    @pytest.mark.unit
    def test_copy_dir_merges(self, tmp_path: Path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "new.txt").write_text("new")
        (tmp_path / "dst").mkdir()
        (tmp_path / "dst" / "old.txt").write_text("old")

        copy_path(tmp_path / "src", tmp_path / "dst")

        assert sorted(p.name for p in (tmp_path / "dst").iterdir()) == ["new.txt", "old.txt"]

    @pytest.mark.unit
    def test_remove_path(self, tmp_path: Path):
        (tmp_path / "dir" / "sub").mkdir(parents=True)
        (tmp_path / "file").write_text("x")

        remove_path(tmp_path / "dir")
        remove_path(tmp_path / "file")
        remove_path(tmp_path / "missing")

        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(3.7, "3.7s"), (65.2, "1m 5s"), (3661.0, "1h 1m 1s"), (-2, "0.0s")],
    )
    def test_format_duration(self, seconds: float, expected: str):
        assert format_duration(seconds) == expected


# ---------------------------------------------------------------------------
# StepSpinner
# ---------------------------------------------------------------------------


class TestStepSpinner:
    @pytest.mark.unit
    def test_lifecycle(self):
        progress = MagicMock()
        with patch("create_dapp.utils.create_progress", return_value=progress), patch(
            "create_dapp.utils.console"
        ) as console:
            step = StepSpinner("Writing .env")
            assert step.state == "pending"

            step.start()
            assert step.state == "spinning"
            progress.add_task.assert_called_once_with("Writing .env", total=None)
            progress.start.assert_called_once()

            step.succeed()

        assert step.state == "succeeded"
        progress.stop.assert_called_once()
        assert "Writing .env" in console.print.call_args.args[0]

    @pytest.mark.unit
    def test_fail_with_message(self):
        with patch("create_dapp.utils.create_progress", return_value=MagicMock()), patch(
            "create_dapp.utils.console"
        ) as console:
            step = StepSpinner("Installing").start()
            step.fail("Failed to scaffold project: boom")

        assert step.state == "failed"
        assert "Failed to scaffold project: boom" in console.print.call_args.args[0]
