"""
Dependency injection container for managing application dependencies.
"""

import logging
from typing import Optional

from vault_chooser.adapters.files.local_fs_adapter import LocalDirectoryListingAdapter
from vault_chooser.adapters.files.memory_fs_adapter import (
    InMemoryDirectoryListingAdapter,
)
from vault_chooser.config.settings import Settings, settings as default_settings
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort
from vault_chooser.use_cases.navigation.chooser_session import (
    ChooserSession,
    CompletionCallback,
)
from vault_chooser.use_cases.navigation.session_registry import ChooserSessionRegistry


class DependencyContainer:
    """
    Container for managing application dependencies using dependency injection.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._instances = {}
        self._settings = settings
        self._logger = logging.getLogger(__name__)

    @property
    def settings(self) -> Settings:
        return self._settings or default_settings

    def get_directory_listing_gateway(self) -> DirectoryListingPort:
        """
        Get the directory listing gateway instance.

        A virtual tree file takes precedence over the local root directory.

        Returns:
            DirectoryListingPort implementation
        """
        if "directory_listing_gateway" not in self._instances:
            config = self.settings
            if config.tree_file:
                gateway: DirectoryListingPort = (
                    InMemoryDirectoryListingAdapter.from_json_file(
                        config.tree_file, logger=self._logger
                    )
                )
            else:
                gateway = LocalDirectoryListingAdapter(
                    config.root_path,
                    show_hidden=config.show_hidden,
                    logger=self._logger,
                )
            self._instances["directory_listing_gateway"] = gateway
        return self._instances["directory_listing_gateway"]

    def create_chooser_session(
        self, on_complete: Optional[CompletionCallback] = None
    ) -> ChooserSession:
        """
        Create a new chooser session with injected dependencies.

        Sessions are never cached: each host interaction gets its own state.

        Returns:
            Fresh ChooserSession at the root, not yet initialized
        """
        return ChooserSession(
            self.get_directory_listing_gateway(),
            suffix=self.settings.document_suffix,
            on_complete=on_complete,
            logger=self._logger,
        )

    def get_session_registry(self) -> ChooserSessionRegistry:
        """
        Get the registry of live chooser sessions.

        Returns:
            Configured ChooserSessionRegistry
        """
        if "session_registry" not in self._instances:
            self._instances["session_registry"] = ChooserSessionRegistry(
                self.create_chooser_session,
                session_ttl=self.settings.session_ttl,
                max_sessions=self.settings.max_sessions,
                logger=self._logger,
            )
        return self._instances["session_registry"]

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()


# Global container instance
container = DependencyContainer()
