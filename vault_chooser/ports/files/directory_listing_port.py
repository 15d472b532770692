"""
Directory listing port interface defining the contract for listing gateways.
"""

from abc import ABC, abstractmethod

from vault_chooser.entities.directory_entry import DirectoryEntry, DirectoryReference


class DirectoryListingPort(ABC):
    """Port interface for listing the immediate children of a directory."""

    @abstractmethod
    async def get_directory_contents(
        self, directory: DirectoryReference
    ) -> list[DirectoryEntry]:
        """
        List the immediate entries of a directory.

        Args:
            directory: Reference (identifier and display name) of the directory

        Returns:
            Ordered list of DirectoryEntry entities

        Raises:
            DirectoryListingError: If the directory cannot be listed
        """
        pass
