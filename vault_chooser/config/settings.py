"""
Configuration settings for the application.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from vault_chooser.exceptions import ConfigurationError
from vault_chooser.utils.paths import normalize_suffix

# Load environment variables from .env file
_ = load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.root_path: str = os.path.expanduser(
            self._get_env("VAULT_CHOOSER_ROOT", "~")
        )
        self.tree_file: Optional[str] = os.getenv("VAULT_CHOOSER_TREE_FILE") or None
        self.document_suffix: str = self._get_suffix(
            "VAULT_CHOOSER_SUFFIX", ".bcup"
        )
        self.show_hidden: bool = self._get_bool("VAULT_CHOOSER_SHOW_HIDDEN", False)
        self.log_level: str = self._get_log_level("VAULT_CHOOSER_LOG_LEVEL", "INFO")
        # Idle HTTP sessions are evicted after this many seconds
        self.session_ttl: float = self._get_positive_number(
            "VAULT_CHOOSER_SESSION_TTL", 1800.0
        )
        self.max_sessions: int = int(
            self._get_positive_number("VAULT_CHOOSER_MAX_SESSIONS", 100, integer=True)
        )

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)

    def _get_bool(self, key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"Environment variable {key} must be a boolean, got {value!r}")

    def _get_positive_number(
        self, key: str, default: float, integer: bool = False
    ) -> float:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        try:
            number = int(value) if integer else float(value)
        except ValueError:
            raise ConfigurationError(
                f"Environment variable {key} must be a positive number, got {value!r}"
            )
        if number <= 0:
            raise ConfigurationError(
                f"Environment variable {key} must be a positive number, got {value!r}"
            )
        return number

    def _get_suffix(self, key: str, default: str) -> str:
        suffix = normalize_suffix(self._get_env(key, default))
        if suffix in ("", ".") or "/" in suffix or "\\" in suffix:
            raise ConfigurationError(
                f"Environment variable {key} must be a file suffix like '.bcup', got {suffix!r}"
            )
        return suffix

    def _get_log_level(self, key: str, default: str) -> str:
        level = self._get_env(key, default).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Environment variable {key} is not a log level: {level}")
        return level


# Global settings instance
settings = Settings()
