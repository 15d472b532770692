"""
In-memory virtual file system implementation of the directory listing port.
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from typing_extensions import override

from vault_chooser.entities.directory_entry import (
    DirectoryEntry,
    DirectoryReference,
    EntryKind,
)
from vault_chooser.exceptions import DirectoryListingError
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort
from vault_chooser.utils.paths import ROOT, join

# Nested mapping: a directory maps names to sub-trees, a file maps to None.
VirtualTree = Mapping[str, Any]


class InMemoryDirectoryListingAdapter(DirectoryListingPort):
    """Serves listings from a nested mapping instead of a real filesystem."""

    def __init__(
        self,
        tree: VirtualTree,
        latency: float = 0.0,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the adapter.

        Args:
            tree: Root directory mapping; nested mappings are directories, None values are files
            latency: Seconds to sleep before answering, to simulate a remote store
            logger: Logger instance to use for logging
        """
        self._logger = logger or logging.getLogger(__name__)
        self._latency = latency
        self._listings: dict[str, list[DirectoryEntry]] = {}
        self._index(ROOT, tree)

    @classmethod
    def from_json_file(
        cls, path: str, logger: Optional[logging.Logger] = None
    ) -> "InMemoryDirectoryListingAdapter":
        """
        Load a virtual tree from a JSON file.

        Raises:
            DirectoryListingError: If the file cannot be read or is not a JSON object
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                tree = json.load(f)
        except (OSError, ValueError) as e:
            raise DirectoryListingError(f"Cannot load virtual tree from {path}: {e}")
        if not isinstance(tree, dict):
            raise DirectoryListingError(f"Virtual tree in {path} must be a JSON object")
        return cls(tree, logger=logger)

    def _index(self, identifier: str, tree: VirtualTree) -> None:
        entries: list[DirectoryEntry] = []
        for name, child in tree.items():
            child_identifier = join(identifier, name)
            if child is None:
                entries.append(DirectoryEntry(child_identifier, name, EntryKind.FILE))
            elif isinstance(child, Mapping):
                entries.append(
                    DirectoryEntry(child_identifier, name, EntryKind.DIRECTORY)
                )
                self._index(child_identifier, child)
            else:
                raise DirectoryListingError(
                    f"Invalid virtual tree node at {child_identifier}: {child!r}"
                )
        self._listings[identifier] = entries

    @override
    async def get_directory_contents(
        self, directory: DirectoryReference
    ) -> list[DirectoryEntry]:
        if self._latency:
            await asyncio.sleep(self._latency)
        try:
            return list(self._listings[directory.identifier])
        except KeyError:
            raise DirectoryListingError(
                f"Directory does not exist: {directory.identifier}"
            )
