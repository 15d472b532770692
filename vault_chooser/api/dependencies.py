"""
FastAPI dependency functions for retrieving services from the container.
"""

from vault_chooser.container import container
from vault_chooser.use_cases.navigation.session_registry import ChooserSessionRegistry


def get_session_registry() -> ChooserSessionRegistry:
    """
    Get the chooser session registry from the container.

    Returns:
        ChooserSessionRegistry: The registry instance
    """
    return container.get_session_registry()
