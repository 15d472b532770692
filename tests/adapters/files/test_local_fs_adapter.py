"""
Tests for the LocalDirectoryListingAdapter.
"""

import os
from unittest.mock import patch

import pytest

from vault_chooser.adapters.files.local_fs_adapter import LocalDirectoryListingAdapter
from vault_chooser.entities.directory_entry import DirectoryReference, EntryKind
from vault_chooser.exceptions import DirectoryListingError


def _ref(identifier: str) -> DirectoryReference:
    return DirectoryReference.for_identifier(identifier)


class TestLocalDirectoryListingAdapter:
    """Test cases for the LocalDirectoryListingAdapter."""

    async def test_list_root_success(self, temp_directory, mock_logger):
        """Test listing the configured root as '/'."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        entries = await adapter.get_directory_contents(_ref("/"))

        # directories first, then files, case-insensitive by name; dot-files hidden
        assert [e.identifier for e in entries] == [
            "/Archive",
            "/beta",
            "/notes.txt",
            "/vault.bcup",
        ]
        assert [e.kind for e in entries] == [
            EntryKind.DIRECTORY,
            EntryKind.DIRECTORY,
            EntryKind.FILE,
            EntryKind.FILE,
        ]
        assert entries[0].name == "Archive"

    async def test_list_nested_directory(self, temp_directory, mock_logger):
        """Test that nested identifiers are built from the parent identifier."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        entries = await adapter.get_directory_contents(_ref("/Archive"))

        assert [e.identifier for e in entries] == ["/Archive/old.bcup"]

    async def test_list_empty_directory(self, temp_directory, mock_logger):
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        entries = await adapter.get_directory_contents(_ref("/beta"))

        assert entries == []

    async def test_show_hidden(self, temp_directory, mock_logger):
        """Test that dot-files are listed when show_hidden is set."""
        adapter = LocalDirectoryListingAdapter(
            temp_directory, show_hidden=True, logger=mock_logger
        )

        entries = await adapter.get_directory_contents(_ref("/"))

        assert "/.hidden" in [e.identifier for e in entries]

    async def test_list_nonexistent_directory(self, temp_directory, mock_logger):
        """Test listing a directory that does not exist."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        with pytest.raises(DirectoryListingError, match="Directory does not exist"):
            await adapter.get_directory_contents(_ref("/nonexistent"))

    async def test_list_file_path(self, temp_directory, mock_logger):
        """Test listing a file instead of a directory."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        with pytest.raises(DirectoryListingError, match="Path is not a directory"):
            await adapter.get_directory_contents(_ref("/notes.txt"))

    async def test_list_outside_root(self, temp_directory, mock_logger):
        """Test that identifiers cannot escape the configured root."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        with pytest.raises(DirectoryListingError, match="Path escapes the chooser root"):
            await adapter.get_directory_contents(_ref("/../"))

    @patch("os.scandir")
    async def test_list_with_scandir_error(self, mock_scandir, temp_directory, mock_logger):
        """Test that unexpected errors are wrapped in DirectoryListingError."""
        mock_scandir.side_effect = Exception("Scan error")
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        with pytest.raises(
            DirectoryListingError, match="Failed to list directory /: Scan error"
        ):
            await adapter.get_directory_contents(_ref("/"))

    def test_to_native_path(self, temp_directory, mock_logger):
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        assert adapter.to_native_path("/vault.bcup") == os.path.join(
            os.path.realpath(temp_directory), "vault.bcup"
        )
        assert adapter.to_native_path("/") == os.path.realpath(temp_directory)

    def test_to_native_path_for_new_file(self, temp_directory, mock_logger):
        """Test mapping a not-yet-created target."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        assert adapter.to_native_path("/Archive/new.bcup") == os.path.join(
            os.path.realpath(temp_directory), "Archive", "new.bcup"
        )

    def test_to_native_path_keeps_symlinked_leaf(self, tmp_path, mock_logger):
        """Test that a symlinked file maps to the link, not to its target."""
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "real.bcup").write_text("vault")
        os.symlink(tmp_path / "real.bcup", root / "link.bcup")
        adapter = LocalDirectoryListingAdapter(str(root), logger=mock_logger)

        assert adapter.to_native_path("/link.bcup") == os.path.join(
            os.path.realpath(root), "link.bcup"
        )

    async def test_symlinked_directory_outside_root_is_not_listed(
        self, tmp_path, mock_logger
    ):
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "elsewhere").mkdir()
        os.symlink(tmp_path / "elsewhere", root / "escape")
        adapter = LocalDirectoryListingAdapter(str(root), logger=mock_logger)

        with pytest.raises(DirectoryListingError, match="Path escapes the chooser root"):
            await adapter.get_directory_contents(_ref("/escape"))

    def test_to_native_path_rejects_escaping_parent(self, temp_directory, mock_logger):
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        with pytest.raises(DirectoryListingError, match="Path escapes the chooser root"):
            adapter.to_native_path("/../outside.bcup")

    def test_validate_directory_success(self, temp_directory, mock_logger):
        """Test the _validate_directory helper method with a valid directory."""
        adapter = LocalDirectoryListingAdapter(temp_directory, logger=mock_logger)

        # Should not raise an exception
        adapter._validate_directory(temp_directory)
