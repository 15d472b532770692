"""Path helpers for gateway identifiers.

Identifiers are POSIX-style strings rooted at "/". Nothing here touches the
real filesystem, and nothing resolves "." or "..": joining is plain
concatenation with redundant separators collapsed.
"""

from __future__ import annotations

import re

ROOT = "/"
SEPARATOR = "/"

_REPEATED_SEPARATORS = re.compile(r"/{2,}")
_NON_DOT = re.compile(r"[^.]")
_PATH_SEPARATORS = re.compile(r"[/\\]")


def _strip_trailing_separator(path: str) -> str:
    if path != ROOT and path.endswith(SEPARATOR):
        return path.rstrip(SEPARATOR) or ROOT
    return path


def basename(path: str) -> str:
    """Return the last segment of ``path``; the root is its own basename."""
    path = _strip_trailing_separator(path)
    if path == ROOT:
        return ROOT
    return path.rsplit(SEPARATOR, 1)[-1]


def join(directory: str, name: str) -> str:
    """Join ``name`` onto ``directory`` without resolving relative segments."""
    if not name:
        return _strip_trailing_separator(directory) or ROOT
    joined = _REPEATED_SEPARATORS.sub(SEPARATOR, f"{directory}{SEPARATOR}{name}")
    return _strip_trailing_separator(joined)


def normalize_suffix(suffix: str) -> str:
    suffix = (suffix or "").strip()
    if suffix and not suffix.startswith("."):
        suffix = f".{suffix}"
    return suffix


def has_extension(path: str, suffix: str) -> bool:
    """Case-insensitive check that ``path`` ends with ``suffix``."""
    return path.lower().endswith(normalize_suffix(suffix).lower())


def ensure_extension(path: str, suffix: str) -> str:
    if has_extension(path, suffix):
        return path
    return f"{path}{normalize_suffix(suffix)}"


def is_valid_filename(text: str | None) -> bool:
    """Return True when ``text`` can name a single new leaf file.

    The name needs at least one character that is not a dot and may not
    contain "/" or "\\".
    """
    if text is None:
        return False
    return bool(_NON_DOT.search(text)) and not _PATH_SEPARATORS.search(text)
