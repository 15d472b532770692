"""
Use case for composing a new, not-yet-existing target path.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Optional

from vault_chooser.entities.navigation_state import ComposerState
from vault_chooser.exceptions import (
    ConfigurationError,
    InvalidFilenameError,
    NavigationError,
)
from vault_chooser.use_cases.navigation.navigate_directories import DirectoryNavigator
from vault_chooser.utils.paths import (
    ensure_extension,
    is_valid_filename,
    join,
    normalize_suffix,
)

DEFAULT_DOCUMENT_SUFFIX = ".bcup"


class NewTargetComposer:
    """Turns a filename typed into a prompt into a new target inside the current directory."""

    def __init__(
        self,
        navigator: DirectoryNavigator,
        suffix: str = DEFAULT_DOCUMENT_SUFFIX,
        on_change: Optional[Callable[[ComposerState], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the composer with a closed prompt.

        Args:
            navigator: Navigator whose current directory and entries are used
            suffix: Document suffix appended to new targets when missing
            on_change: Called with the new composer state after every change
            logger: Logger instance to use for logging

        Raises:
            ConfigurationError: If the suffix is empty
        """
        self._navigator = navigator
        self._suffix = normalize_suffix(suffix)
        if not self._suffix:
            raise ConfigurationError("Document suffix must not be empty")
        self._on_change = on_change
        self._logger = logger or logging.getLogger(__name__)
        self._state = ComposerState()

    @property
    def state(self) -> ComposerState:
        return self._state

    @property
    def suffix(self) -> str:
        return self._suffix

    def _commit(self, **changes: Any) -> ComposerState:
        self._state = replace(self._state, **changes)
        if self._on_change is not None:
            self._on_change(self._state)
        return self._state

    def open_prompt(self) -> ComposerState:
        return self._commit(prompt_open=True, filename_draft="", collision=None)

    def close_prompt(self) -> ComposerState:
        return self._commit(prompt_open=False, filename_draft=None)

    def update_filename_draft(self, text: str) -> ComposerState:
        """
        Store the raw prompt input; validation happens on submit.

        Raises:
            NavigationError: If the prompt is not open
        """
        if not self._state.prompt_open:
            raise NavigationError("The new target prompt is not open")
        return self._commit(filename_draft=text)

    def submit_prompt(self) -> Optional[str]:
        """
        Compose the new target from the filename draft.

        The draft is joined onto the current directory and given the document
        suffix unless it already ends with it. A path that matches an entry of
        the current listing is discarded together with any draft or selection.

        Returns:
            The new target path, or None when it collided with an existing entry

        Raises:
            NavigationError: If the prompt is not open
            InvalidFilenameError: If the draft is empty, dots only, or contains separators
        """
        state = self._state
        if not state.prompt_open:
            raise NavigationError("The new target prompt is not open")
        if not is_valid_filename(state.filename_draft):
            raise InvalidFilenameError(
                f"Invalid filename for a new target: {state.filename_draft!r}"
            )

        navigation = self._navigator.state
        path = ensure_extension(
            join(navigation.current_directory, state.filename_draft), self._suffix
        )

        if any(entry.identifier == path for entry in navigation.entries):
            self._logger.warning(f"New target already exists, discarding it: {path}")
            self._navigator.discard_targets()
            self._commit(prompt_open=False, filename_draft=None, collision=path)
            return None

        self._navigator.set_draft_target(path)
        self._commit(prompt_open=False, filename_draft=None)
        self._logger.info(f"Drafted new target: {path}")
        return path

    def cancel_draft(self) -> bool:
        """Drop the drafted target; see DirectoryNavigator.cancel_draft."""
        return self._navigator.cancel_draft()
