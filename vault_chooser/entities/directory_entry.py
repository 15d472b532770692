"""
Directory entry domain entities.
"""

from dataclasses import dataclass
from enum import Enum

from vault_chooser.exceptions import DirectoryListingError
from vault_chooser.utils.paths import ROOT, basename


class EntryKind(str, Enum):
    """Kind of a listed filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntry:
    """
    One immediate child of a listed directory, as reported by a listing gateway.

    Attributes:
        identifier: Canonical gateway address of the entry (usually a full path)
        name: Display label
        kind: Whether the entry is a file or a directory
    """

    identifier: str
    name: str
    kind: EntryKind

    def __post_init__(self) -> None:
        if not self.identifier or not isinstance(self.identifier, str):
            raise DirectoryListingError("Entry identifier must be a non-empty string")
        if not isinstance(self.kind, EntryKind):
            try:
                object.__setattr__(self, "kind", EntryKind(self.kind))
            except ValueError:
                raise DirectoryListingError(f"Unknown entry kind: {self.kind}")

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    def get_details(self) -> dict[str, str]:
        """
        Get the entry as a plain dictionary.

        Returns:
            Dictionary with identifier, name and type
        """
        return {
            "identifier": self.identifier,
            "name": self.name,
            "type": self.kind.value,
        }


@dataclass(frozen=True)
class DirectoryReference:
    """Directory handle passed to listing gateways."""

    identifier: str
    name: str

    @classmethod
    def for_identifier(cls, identifier: str) -> "DirectoryReference":
        return cls(identifier=identifier, name=basename(identifier))


@dataclass(frozen=True)
class BreadcrumbEntry:
    """One ancestor directory on the way from the root to the current directory."""

    label: str
    identifier: str

    @classmethod
    def for_directory(cls, identifier: str) -> "BreadcrumbEntry":
        """Breadcrumb for ``identifier``, labeled "/" at the root and by basename elsewhere."""
        label = ROOT if identifier == ROOT else basename(identifier)
        return cls(label=label, identifier=identifier)

    def get_details(self) -> dict[str, str]:
        return {"label": self.label, "identifier": self.identifier}
