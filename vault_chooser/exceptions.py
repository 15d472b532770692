"""
Custom exceptions for the application.
"""


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class DirectoryListingError(BaseAppError):
    """Exception raised when a directory listing cannot be fetched."""

    pass


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass


class NavigationError(BaseAppError):
    """Exception raised when a chooser command is issued outside its precondition."""

    pass


class InvalidFilenameError(NavigationError):
    """Exception raised when a new-target filename draft cannot be submitted."""

    pass


class ChooserSessionError(BaseAppError):
    """Exception raised for chooser session lifecycle errors."""

    pass


class SessionNotFoundError(ChooserSessionError):
    """Exception raised when a chooser session id is unknown."""

    pass
