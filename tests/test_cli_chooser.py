"""
Tests for the interactive chooser CLI.
"""

import io
import json
import os
from unittest.mock import patch

import pytest
from rich.console import Console

from vault_chooser.cli_chooser import _parse_command, main, run_chooser
from vault_chooser.exceptions import DirectoryListingError
from vault_chooser.use_cases.navigation.chooser_session import ChooserSession


def _script(*lines):
    """read_line stand-in answering with the given lines, then EOF."""
    remaining = list(lines)

    def read_line(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read_line


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, no_color=True)


@pytest.fixture
def session(memory_gateway, mock_logger):
    return ChooserSession(memory_gateway, logger=mock_logger)


class TestRunChooser:
    """Test cases for run_chooser."""

    async def test_select_existing_file(self, session, console):
        # root listing: 1 home/, 2 tmp/, 3 root.bcup
        target = await run_chooser(session, console, _script("3", "ok"))

        assert target == "/root.bcup"
        assert session.completed is True

    async def test_navigate_and_draft(self, session, console):
        target = await run_chooser(session, console, _script("1", "new mynotes", "ok"))

        assert target == "/home/mynotes.bcup"

    async def test_up_and_crumb(self, session, console):
        target = await run_chooser(
            session, console, _script("1", "1", "crumb 2", "up", "3", "ok")
        )

        assert target == "/root.bcup"

    async def test_collision_is_reported(self, session, console):
        await run_chooser(session, console, _script("1", "new notes", "quit"))

        output = console.file.getvalue()
        assert "/home/notes.bcup already exists" in output

    async def test_errors_are_printed_and_loop_continues(self, session, console):
        target = await run_chooser(
            session,
            console,
            _script("ok", "up", "9", "new a/b", "frobnicate", "3", "ok"),
        )

        output = console.file.getvalue()
        assert "Nothing is selected" in output
        assert "Already at the root" in output
        assert "Number must be between 1 and 3" in output
        assert "A vault name needs a non-dot character" in output
        assert "Unknown command: frobnicate" in output
        assert target == "/root.bcup"

    async def test_cancel_draft(self, session, console):
        target = await run_chooser(session, console, _script("new fresh", "cancel", "ok"))

        assert target is None
        assert "Nothing is selected" in console.file.getvalue()

    async def test_end_of_input_aborts(self, session, console):
        target = await run_chooser(session, console, _script("3"))

        assert target is None
        assert session.completed is True

    async def test_help(self, session, console):
        await run_chooser(session, console, _script("help"))

        assert "Commands" in console.file.getvalue()

    def test_parse_command(self):
        assert _parse_command("  NEW  my vault ") == ("new", ["my", "vault"])
        assert _parse_command("   ") == ("", [])


class TestMain:
    """Test cases for the CLI entry point."""

    @pytest.fixture
    def tree_file(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text(json.dumps({"vaults": {"work.bcup": None}}))
        return str(path)

    def test_prints_chosen_virtual_path(self, tree_file, capsys):
        with patch.object(Console, "input", side_effect=_script("1", "1", "ok")):
            exit_code = main(["--tree", tree_file])

        assert exit_code == 0
        assert capsys.readouterr().out == "/vaults/work.bcup\n"

    def test_prints_native_path_for_local_root(self, temp_directory, capsys):
        with patch.object(Console, "input", side_effect=_script("new fresh", "ok")):
            exit_code = main(["--root", temp_directory])

        assert exit_code == 0
        expected = os.path.join(os.path.realpath(temp_directory), "fresh.bcup")
        assert capsys.readouterr().out == expected + "\n"

    def test_symlinked_file_prints_link_path(self, tmp_path, capsys):
        """Test that a listed symlink pointing outside the root can still be chosen."""
        root = tmp_path / "root"
        outside = tmp_path / "outside"
        root.mkdir()
        outside.mkdir()
        (outside / "real.bcup").write_text("vault")
        os.symlink(outside / "real.bcup", root / "link.bcup")

        with patch.object(Console, "input", side_effect=_script("1", "ok")):
            exit_code = main(["--root", str(root)])

        assert exit_code == 0
        expected = os.path.join(os.path.realpath(root), "link.bcup")
        assert capsys.readouterr().out == expected + "\n"

    def test_unmappable_target_exits_with_two(self, temp_directory, capsys):
        with (
            patch.object(Console, "input", side_effect=_script("new fresh", "ok")),
            patch(
                "vault_chooser.cli_chooser.LocalDirectoryListingAdapter.to_native_path",
                side_effect=DirectoryListingError("Path escapes the chooser root: /fresh.bcup"),
            ),
        ):
            exit_code = main(["--root", temp_directory])

        assert exit_code == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Path escapes the chooser root" in captured.err

    def test_ctrl_c_exits_with_one(self, tree_file, capsys):
        def interrupted(coro):
            coro.close()
            raise KeyboardInterrupt

        with patch("vault_chooser.cli_chooser.asyncio.run", side_effect=interrupted):
            exit_code = main(["--tree", tree_file])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_quit_exits_with_one(self, tree_file, capsys):
        with patch.object(Console, "input", side_effect=_script("quit")):
            exit_code = main(["--tree", tree_file])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_bad_tree_file_exits_with_two(self, tmp_path, capsys):
        exit_code = main(["--tree", str(tmp_path / "missing.json")])

        assert exit_code == 2
        assert "Cannot load virtual tree" in capsys.readouterr().err
