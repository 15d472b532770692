"""
Tests for the directory entry and state entities.
"""

import dataclasses

import pytest

from vault_chooser.entities.directory_entry import (
    BreadcrumbEntry,
    DirectoryEntry,
    DirectoryReference,
    EntryKind,
)
from vault_chooser.entities.navigation_state import (
    ChooserSnapshot,
    ComposerState,
    NavigationState,
)
from vault_chooser.exceptions import DirectoryListingError


class TestDirectoryEntry:
    """Test cases for the DirectoryEntry entity."""

    def test_kind_helpers(self):
        """Test is_file / is_directory."""
        entry = DirectoryEntry("/home", "home", EntryKind.DIRECTORY)

        assert entry.is_directory
        assert not entry.is_file

    def test_kind_given_as_string(self):
        """Test that a raw kind string is coerced to EntryKind."""
        entry = DirectoryEntry("/a.bcup", "a.bcup", "file")

        assert entry.kind is EntryKind.FILE

    def test_unknown_kind(self):
        with pytest.raises(DirectoryListingError, match="Unknown entry kind"):
            DirectoryEntry("/a", "a", "symlink")

    def test_empty_identifier(self):
        with pytest.raises(
            DirectoryListingError, match="Entry identifier must be a non-empty string"
        ):
            DirectoryEntry("", "a", EntryKind.FILE)

    def test_entries_are_immutable(self):
        entry = DirectoryEntry("/a", "a", EntryKind.FILE)

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.name = "b"  # type: ignore[misc]

    def test_get_details(self):
        entry = DirectoryEntry("/home", "home", EntryKind.DIRECTORY)

        assert entry.get_details() == {
            "identifier": "/home",
            "name": "home",
            "type": "directory",
        }


class TestBreadcrumbEntry:
    """Test cases for BreadcrumbEntry."""

    def test_root_breadcrumb_label(self):
        assert BreadcrumbEntry.for_directory("/") == BreadcrumbEntry("/", "/")

    def test_nested_breadcrumb_label(self):
        assert BreadcrumbEntry.for_directory("/home/alice") == BreadcrumbEntry(
            "alice", "/home/alice"
        )


class TestDirectoryReference:
    """Test cases for DirectoryReference."""

    def test_for_identifier(self):
        assert DirectoryReference.for_identifier("/home") == DirectoryReference("/home", "home")
        assert DirectoryReference.for_identifier("/") == DirectoryReference("/", "/")


class TestStates:
    """Test cases for the state snapshots."""

    def test_initial_navigation_state(self):
        """Test the state a session starts from."""
        state = NavigationState()

        assert state.current_directory == "/"
        assert state.breadcrumbs == ()
        assert state.is_loading is False
        assert state.entries == ()
        assert state.selected_target is None
        assert state.draft_target is None
        assert state.listing_error is None

    def test_navigation_details(self):
        state = NavigationState(
            current_directory="/home",
            breadcrumbs=(BreadcrumbEntry("/", "/"),),
            entries=(DirectoryEntry("/home/a.bcup", "a.bcup", EntryKind.FILE),),
            selected_target="/home/a.bcup",
        )

        details = state.get_details()

        assert details["breadcrumbs"] == [{"label": "/", "identifier": "/"}]
        assert details["entries"][0]["type"] == "file"
        assert details["selected_target"] == "/home/a.bcup"

    @pytest.mark.parametrize(
        "state,expected",
        [
            (ComposerState(), False),
            (ComposerState(prompt_open=True, filename_draft=""), False),
            (ComposerState(prompt_open=True, filename_draft=".."), False),
            (ComposerState(prompt_open=True, filename_draft="a/b"), False),
            (ComposerState(prompt_open=True, filename_draft="notes"), True),
            (ComposerState(prompt_open=False, filename_draft="notes"), False),
        ],
    )
    def test_can_submit(self, state, expected):
        assert state.can_submit is expected

    def test_snapshot_details(self):
        snapshot = ChooserSnapshot(NavigationState(), ComposerState(), completed=True)

        details = snapshot.get_details()

        assert details["completed"] is True
        assert details["composer"]["can_submit"] is False
        assert details["navigation"]["current_directory"] == "/"
