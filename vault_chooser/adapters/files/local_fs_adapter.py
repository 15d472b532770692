"""
Local file system adapter implementation of the directory listing port.
"""

import asyncio
import logging
import os

from typing_extensions import override

from vault_chooser.entities.directory_entry import (
    DirectoryEntry,
    DirectoryReference,
    EntryKind,
)
from vault_chooser.exceptions import DirectoryListingError
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort
from vault_chooser.utils.paths import ROOT, join


class LocalDirectoryListingAdapter(DirectoryListingPort):
    """
    Lists a real directory tree under virtual identifiers.

    The configured ``root_path`` is exposed as "/", so "/docs/a.bcup" maps to
    ``<root_path>/docs/a.bcup``.
    """

    def __init__(
        self,
        root_path: str,
        show_hidden: bool = False,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            root_path: Real directory exposed as the virtual root
            show_hidden: Whether to include dot-files and dot-directories
            logger: Logger instance to use for logging. If None, a default logger will be created.
        """
        self._root_path: str = os.path.realpath(os.path.expanduser(root_path))
        self._show_hidden: bool = show_hidden
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

    @property
    def root_path(self) -> str:
        return self._root_path

    def _resolve_within_root(self, identifier: str, relative: str) -> str:
        native = os.path.realpath(os.path.join(self._root_path, relative))
        if os.path.commonpath([self._root_path, native]) != self._root_path:
            raise DirectoryListingError(f"Path escapes the chooser root: {identifier}")
        return native

    def to_native_path(self, identifier: str) -> str:
        """
        Map a chosen target identifier onto the real filesystem.

        Only the parent directory is resolved and checked against the root;
        the leaf is joined as listed, so a symlinked file maps to the link
        itself rather than to its target.

        Args:
            identifier: Virtual identifier rooted at "/"

        Returns:
            Absolute native path

        Raises:
            DirectoryListingError: If the parent directory escapes the configured root
        """
        relative = identifier.strip("/")
        parent, leaf = os.path.split(relative)
        if leaf in ("", ".", ".."):
            return self._resolve_within_root(identifier, relative)
        return os.path.join(self._resolve_within_root(identifier, parent), leaf)

    def _validate_directory(self, directory: str) -> None:
        """
        Validate that a directory exists and is indeed a directory.

        Args:
            directory: Native path of the directory to validate

        Raises:
            DirectoryListingError: If directory does not exist or is not a directory
        """
        if not os.path.exists(directory):
            raise DirectoryListingError(f"Directory does not exist: {directory}")

        if not os.path.isdir(directory):
            raise DirectoryListingError(f"Path is not a directory: {directory}")

    def _create_directory_entries(
        self, parent_identifier: str, native_directory: str
    ) -> list[DirectoryEntry]:
        entries: list[DirectoryEntry] = []
        with os.scandir(native_directory) as it:
            for item in it:
                if not self._show_hidden and item.name.startswith("."):
                    continue
                try:
                    if item.is_dir():
                        kind = EntryKind.DIRECTORY
                    elif item.is_file():
                        kind = EntryKind.FILE
                    else:
                        self._logger.debug(f"Skipping special file {item.path}")
                        continue
                except OSError as e:
                    # Log the error but continue with other entries
                    self._logger.warning(f"Could not process entry {item.path}: {e}")
                    continue
                entries.append(
                    DirectoryEntry(
                        identifier=join(parent_identifier, item.name),
                        name=item.name,
                        kind=kind,
                    )
                )
        entries.sort(key=lambda e: (not e.is_directory, e.name.casefold()))
        return entries

    def _list(self, identifier: str) -> list[DirectoryEntry]:
        # Listed directories are fully resolved so a symlinked directory cannot lead outside
        native = self._resolve_within_root(identifier, identifier.strip("/"))
        self._validate_directory(native)
        return self._create_directory_entries(identifier or ROOT, native)

    @override
    async def get_directory_contents(
        self, directory: DirectoryReference
    ) -> list[DirectoryEntry]:
        """
        List the immediate entries of a directory under the configured root.

        Args:
            directory: Reference of the directory to list

        Returns:
            Directories first, then files, each sorted case-insensitively by name

        Raises:
            DirectoryListingError: If listing fails
        """
        try:
            return await asyncio.to_thread(self._list, directory.identifier)
        except DirectoryListingError:
            raise
        except Exception as e:
            raise DirectoryListingError(
                f"Failed to list directory {directory.identifier}: {str(e)}"
            )
