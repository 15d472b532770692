"""
Chooser session: one navigation state machine plus its new-target composer.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional

from vault_chooser.entities.directory_entry import BreadcrumbEntry, DirectoryEntry
from vault_chooser.entities.navigation_state import (
    ChooserSnapshot,
    ComposerState,
    NavigationState,
)
from vault_chooser.exceptions import ChooserSessionError
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort
from vault_chooser.use_cases.navigation.compose_target import (
    DEFAULT_DOCUMENT_SUFFIX,
    NewTargetComposer,
)
from vault_chooser.use_cases.navigation.navigate_directories import DirectoryNavigator

SnapshotListener = Callable[[ChooserSnapshot], None]
CompletionCallback = Callable[[Optional[str]], None]


class ChooserSession:
    """
    Facade handed to presentation layers.

    Hosts read ``snapshot`` (or subscribe to it), forward user intents to the
    command methods, and finish the session with ``complete`` or ``abort``.
    The completion callback runs exactly once; after that every command
    raises ChooserSessionError.
    """

    def __init__(
        self,
        gateway: DirectoryListingPort,
        suffix: str = DEFAULT_DOCUMENT_SUFFIX,
        on_complete: Optional[CompletionCallback] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger(__name__)
        self._on_complete = on_complete
        self._listeners: list[SnapshotListener] = []
        self._completed = False
        self._result: Optional[str] = None
        self._navigator = DirectoryNavigator(
            gateway, on_change=self._state_changed, logger=self._logger
        )
        self._composer = NewTargetComposer(
            self._navigator,
            suffix=suffix,
            on_change=self._state_changed,
            logger=self._logger,
        )

    @property
    def navigator(self) -> DirectoryNavigator:
        return self._navigator

    @property
    def composer(self) -> NewTargetComposer:
        return self._composer

    @property
    def snapshot(self) -> ChooserSnapshot:
        return ChooserSnapshot(
            navigation=self._navigator.state,
            composer=self._composer.state,
            completed=self._completed,
        )

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def result(self) -> Optional[str]:
        return self._result

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called with a fresh snapshot after every change.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _state_changed(self, _state: NavigationState | ComposerState) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self._logger.exception("Chooser snapshot listener failed")

    def _ensure_open(self) -> None:
        if self._completed:
            raise ChooserSessionError("Chooser session is already completed")

    # Navigation commands

    def initialize(self) -> "asyncio.Task[NavigationState]":
        self._ensure_open()
        return self._navigator.initialize()

    def enter_directory(self, entry: DirectoryEntry) -> "asyncio.Task[NavigationState]":
        self._ensure_open()
        return self._navigator.enter_directory(entry)

    def select_file(self, entry: DirectoryEntry) -> NavigationState:
        self._ensure_open()
        return self._navigator.select_file(entry)

    def navigate_to_breadcrumb(
        self, target: BreadcrumbEntry
    ) -> "asyncio.Task[NavigationState]":
        self._ensure_open()
        return self._navigator.navigate_to_breadcrumb(target)

    def activate_entry(
        self, entry: DirectoryEntry
    ) -> Optional["asyncio.Task[NavigationState]"]:
        self._ensure_open()
        return self._navigator.activate_entry(entry)

    def select_draft(self) -> NavigationState:
        self._ensure_open()
        return self._navigator.select_draft()

    async def wait_until_idle(self) -> NavigationState:
        return await self._navigator.wait_until_idle()

    # New-target commands

    def open_prompt(self) -> ComposerState:
        self._ensure_open()
        return self._composer.open_prompt()

    def close_prompt(self) -> ComposerState:
        self._ensure_open()
        return self._composer.close_prompt()

    def update_filename_draft(self, text: str) -> ComposerState:
        self._ensure_open()
        return self._composer.update_filename_draft(text)

    def submit_prompt(self) -> Optional[str]:
        self._ensure_open()
        return self._composer.submit_prompt()

    def cancel_draft(self) -> bool:
        self._ensure_open()
        return self._composer.cancel_draft()

    # Completion

    def complete(self) -> Optional[str]:
        """
        Finish the session with the current selection.

        Returns:
            The selected target, or None if nothing is selected

        Raises:
            ChooserSessionError: If the session was already completed or aborted
        """
        return self._finish(self._navigator.state.selected_target)

    def abort(self) -> None:
        """Finish the session without a target."""
        self._finish(None)

    def _finish(self, target: Optional[str]) -> Optional[str]:
        self._ensure_open()
        self._completed = True
        self._result = target
        if target is None:
            self._logger.info("Chooser session finished without a target")
        else:
            self._logger.info(f"Chooser session finished with target: {target}")
        if self._on_complete is not None:
            self._on_complete(target)
        self._state_changed(self._navigator.state)
        return target
