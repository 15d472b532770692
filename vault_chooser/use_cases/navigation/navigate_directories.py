"""
Use case for navigating a directory hierarchy and selecting a target.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Optional

from vault_chooser.entities.directory_entry import (
    BreadcrumbEntry,
    DirectoryEntry,
    DirectoryReference,
)
from vault_chooser.entities.navigation_state import NavigationState
from vault_chooser.exceptions import DirectoryListingError, NavigationError
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort
from vault_chooser.utils.paths import ROOT

StateListener = Callable[[NavigationState], None]


class DirectoryNavigator:
    """
    Navigation state machine over a directory listing gateway.

    Navigation commands update ``current_directory`` and ``breadcrumbs``
    synchronously, then fetch the new listing in an asyncio task which they
    return. Every navigation bumps a generation counter; a fetch only applies
    its result while its generation is still the latest, so a slow listing can
    never overwrite a newer directory's entries.
    """

    def __init__(
        self,
        gateway: DirectoryListingPort,
        on_change: Optional[StateListener] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the navigator at the root, idle and with nothing listed.

        Args:
            gateway: Directory listing gateway to fetch entries from
            on_change: Called with the new snapshot after every state change
            logger: Logger instance to use for logging
        """
        self._gateway = gateway
        self._on_change = on_change
        self._logger = logger or logging.getLogger(__name__)
        self._state = NavigationState()
        self._generation = 0
        self._pending: set[asyncio.Task[NavigationState]] = set()

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def _commit(self, **changes: Any) -> NavigationState:
        self._state = replace(self._state, **changes)
        if self._on_change is not None:
            self._on_change(self._state)
        return self._state

    # Navigation

    def initialize(self) -> "asyncio.Task[NavigationState]":
        """
        Start the session at the root directory and fetch its listing.

        Returns:
            Task resolving to the state once the root listing is applied or discarded
        """
        self._logger.info("Initializing navigation at root")
        return self._navigate(ROOT, ())

    def enter_directory(self, entry: DirectoryEntry) -> "asyncio.Task[NavigationState]":
        """
        Descend into a child directory of the current directory.

        Args:
            entry: Directory entry from the current listing

        Returns:
            Task resolving once the new listing is applied or discarded

        Raises:
            NavigationError: If the entry is not a directory
        """
        if not entry.is_directory:
            raise NavigationError(f"Cannot enter a file: {entry.identifier}")
        current = self._state.current_directory
        breadcrumbs = self._state.breadcrumbs + (BreadcrumbEntry.for_directory(current),)
        self._logger.info(f"Entering directory: {entry.identifier}")
        return self._navigate(entry.identifier, breadcrumbs)

    def navigate_to_breadcrumb(
        self, target: BreadcrumbEntry
    ) -> "asyncio.Task[NavigationState]":
        """
        Jump back up to an ancestor directory.

        The target and every breadcrumb after it are dropped, since the trail
        only ever holds strict ancestors of the current directory.

        Raises:
            NavigationError: If ``target`` is not one of the current breadcrumbs
        """
        breadcrumbs = self._state.breadcrumbs
        try:
            index = breadcrumbs.index(target)
        except ValueError:
            raise NavigationError(
                f"Not an ancestor of {self._state.current_directory}: {target.identifier}"
            )
        self._logger.info(f"Navigating to breadcrumb: {target.identifier}")
        return self._navigate(target.identifier, breadcrumbs[:index])

    def activate_entry(
        self, entry: DirectoryEntry
    ) -> Optional["asyncio.Task[NavigationState]"]:
        """Enter a directory entry or select a file entry."""
        if entry.is_directory:
            return self.enter_directory(entry)
        self.select_file(entry)
        return None

    def _navigate(
        self, identifier: str, breadcrumbs: tuple[BreadcrumbEntry, ...]
    ) -> "asyncio.Task[NavigationState]":
        # Fails with RuntimeError before any state change when no loop is running
        loop = asyncio.get_running_loop()
        self._generation += 1
        generation = self._generation
        self._commit(
            current_directory=identifier,
            breadcrumbs=breadcrumbs,
            draft_target=None,
            is_loading=True,
            listing_error=None,
        )
        task = loop.create_task(self._load(generation, identifier))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _is_stale(self, generation: int, identifier: str) -> bool:
        if generation == self._generation:
            return False
        self._logger.info(
            f"Discarding stale listing for '{identifier}'. "
            f"Current directory is '{self._state.current_directory}'."
        )
        return True

    async def _load(self, generation: int, identifier: str) -> NavigationState:
        reference = DirectoryReference.for_identifier(identifier)
        try:
            entries = await self._gateway.get_directory_contents(reference)
        except DirectoryListingError as e:
            return self._fail(generation, identifier, e)
        except Exception as e:
            return self._fail(
                generation,
                identifier,
                DirectoryListingError(f"Failed to list directory {identifier}: {str(e)}"),
            )
        if self._is_stale(generation, identifier):
            return self._state
        self._logger.info(f"Found {len(entries)} entries in {identifier}")
        return self._commit(entries=tuple(entries), is_loading=False)

    def _fail(
        self, generation: int, identifier: str, error: DirectoryListingError
    ) -> NavigationState:
        if self._is_stale(generation, identifier):
            return self._state
        self._logger.error(f"Error listing directory {identifier}: {error}")
        # entries stay at their previous value
        return self._commit(is_loading=False, listing_error=str(error))

    async def wait_until_idle(self) -> NavigationState:
        """Wait for every in-flight listing task, including ones issued meanwhile."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
        return self._state

    # Selection

    def select_file(self, entry: DirectoryEntry) -> NavigationState:
        """
        Select an existing file as the target.

        Raises:
            NavigationError: If the entry is a directory
        """
        if not entry.is_file:
            raise NavigationError(f"Cannot select a directory: {entry.identifier}")
        self._logger.info(f"Selected file: {entry.identifier}")
        return self._commit(selected_target=entry.identifier)

    def select_draft(self) -> NavigationState:
        """Select the pending draft target again, if there is one."""
        if self._state.draft_target is None:
            return self._state
        return self._commit(selected_target=self._state.draft_target)

    def set_draft_target(self, path: str) -> NavigationState:
        """Record a composed new path as both the draft and the selection."""
        return self._commit(draft_target=path, selected_target=path)

    def discard_targets(self) -> NavigationState:
        """Clear both the draft and the selection."""
        return self._commit(draft_target=None, selected_target=None)

    def cancel_draft(self) -> bool:
        """
        Drop the draft target.

        The selection is cleared too, but only while it still points at the
        draft.

        Returns:
            False if there was no draft to cancel
        """
        draft = self._state.draft_target
        if draft is None:
            return False
        changes: dict[str, Any] = {"draft_target": None}
        if self._state.selected_target == draft:
            changes["selected_target"] = None
        self._logger.info(f"Cancelled draft target: {draft}")
        self._commit(**changes)
        return True

    # Lookups

    def find_entry(self, identifier: str) -> Optional[DirectoryEntry]:
        for entry in self._state.entries:
            if entry.identifier == identifier:
                return entry
        return None

    def find_breadcrumb(self, identifier: str) -> Optional[BreadcrumbEntry]:
        for breadcrumb in self._state.breadcrumbs:
            if breadcrumb.identifier == identifier:
                return breadcrumb
        return None
