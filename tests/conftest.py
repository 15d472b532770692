"""
Pytest configuration and shared fixtures.
"""

import asyncio
import os
import tempfile
from unittest.mock import MagicMock

import pytest

from vault_chooser.adapters.files.memory_fs_adapter import (
    InMemoryDirectoryListingAdapter,
)
from vault_chooser.entities.directory_entry import DirectoryEntry, DirectoryReference
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort

VIRTUAL_TREE = {
    "home": {
        "alice": {
            "docs": {"old.bcup": None},
            "notes.bcup": None,
        },
        "notes.bcup": None,
        "readme.txt": None,
    },
    "tmp": {},
    "root.bcup": None,
}


class ControlledGateway(DirectoryListingPort):
    """Listing gateway whose fetches stay pending until a test resolves them."""

    def __init__(self):
        self.calls: list[DirectoryReference] = []
        self._pending: dict[str, list[asyncio.Future]] = {}

    async def get_directory_contents(self, directory):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(directory)
        self._pending.setdefault(directory.identifier, []).append(future)
        return await future

    async def _next(self, identifier: str) -> asyncio.Future:
        # the fetch task may not have started yet
        while not self._pending.get(identifier):
            await asyncio.sleep(0)
        return self._pending[identifier].pop(0)

    async def resolve(self, identifier: str, entries: list[DirectoryEntry]) -> None:
        (await self._next(identifier)).set_result(entries)

    async def fail(self, identifier: str, error: BaseException) -> None:
        (await self._next(identifier)).set_exception(error)


@pytest.fixture
def temp_directory():
    """
    Create a temporary directory tree for testing listings.

    Returns:
        Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        for name, content in (
            ("vault.bcup", "vault"),
            ("notes.txt", "This is a test file."),
            (".hidden", "secret"),
        ):
            with open(os.path.join(temp_dir, name), "w") as f:
                f.write(content)

        # Create subdirectories, one with a vault inside
        archive = os.path.join(temp_dir, "Archive")
        os.makedirs(archive)
        with open(os.path.join(archive, "old.bcup"), "w") as f:
            f.write("old vault")
        os.makedirs(os.path.join(temp_dir, "beta"))

        yield temp_dir


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def memory_gateway():
    """In-memory gateway serving VIRTUAL_TREE."""
    return InMemoryDirectoryListingAdapter(VIRTUAL_TREE)


@pytest.fixture
def controlled_gateway():
    return ControlledGateway()
