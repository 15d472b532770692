"""
Chooser state snapshots.
"""

from dataclasses import dataclass
from typing import Any, Optional

from vault_chooser.entities.directory_entry import BreadcrumbEntry, DirectoryEntry
from vault_chooser.utils.paths import ROOT, is_valid_filename


@dataclass(frozen=True)
class NavigationState:
    """
    Immutable snapshot of the navigation state machine.

    Invariants:
        - ``breadcrumbs`` is the strict ancestor chain of ``current_directory``,
          root first, and never contains ``current_directory`` itself.
        - ``entries`` is the last successfully applied listing; it may belong to
          a previous directory while ``is_loading`` is true or after a failure.
    """

    current_directory: str = ROOT
    breadcrumbs: tuple[BreadcrumbEntry, ...] = ()
    is_loading: bool = False
    entries: tuple[DirectoryEntry, ...] = ()
    selected_target: Optional[str] = None
    draft_target: Optional[str] = None
    listing_error: Optional[str] = None

    def get_details(self) -> dict[str, Any]:
        """
        Get the snapshot as plain data.

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "current_directory": self.current_directory,
            "breadcrumbs": [b.get_details() for b in self.breadcrumbs],
            "is_loading": self.is_loading,
            "entries": [e.get_details() for e in self.entries],
            "selected_target": self.selected_target,
            "draft_target": self.draft_target,
            "listing_error": self.listing_error,
        }


@dataclass(frozen=True)
class ComposerState:
    """State of the new-target filename prompt."""

    prompt_open: bool = False
    filename_draft: Optional[str] = None
    # normalized path rejected by the last submit because it already exists
    collision: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return self.prompt_open and is_valid_filename(self.filename_draft)

    def get_details(self) -> dict[str, Any]:
        return {
            "prompt_open": self.prompt_open,
            "filename_draft": self.filename_draft,
            "collision": self.collision,
            "can_submit": self.can_submit,
        }


@dataclass(frozen=True)
class ChooserSnapshot:
    """Everything a presentation layer needs to render one chooser session."""

    navigation: NavigationState
    composer: ComposerState
    completed: bool = False

    @property
    def can_submit(self) -> bool:
        return self.composer.can_submit

    def get_details(self) -> dict[str, Any]:
        return {
            "navigation": self.navigation.get_details(),
            "composer": self.composer.get_details(),
            "completed": self.completed,
        }
