"""Path-constrained file lookup.

Two ways to turn a client-supplied name into a file under a served directory:

``resolve_within`` canonicalizes first (percent-decode once, resolve to an
absolute path with symlinks and ``..`` removed) and only then checks that the
result is a descendant of the base directory.

``AllowList`` is the stricter option: names are looked up by exact
membership in a fixed mapping, and anything else is rejected before the
filesystem is touched.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import unquote

from resource_gateway.exceptions import AccessDenied, ConfigurationError, InvalidInput, NotFound

logger = logging.getLogger(__name__)


def _is_path_within(path: Path, base: Path) -> bool:
    # Prefix test against base + separator, so /srv/files-private never
    # passes for /srv/files.
    return str(path).startswith(str(base) + os.sep)


def validate_filename(filename: Any) -> str:
    """Return the percent-decoded name, or raise InvalidInput.

    Raises:
        InvalidInput: If filename is not a non-empty string, or contains a NUL
            byte before or after decoding.
    """
    if not isinstance(filename, str) or not filename.strip():
        raise InvalidInput("Filename is required")
    decoded = unquote(filename)
    if "\x00" in filename or "\x00" in decoded:
        raise InvalidInput("Invalid filename")
    return decoded


def resolve_within(base_dir: Path, filename: Any) -> Path:
    """Resolve a client-supplied file name to a regular file under base_dir.

    Args:
        base_dir: Directory being served. Resolved before comparison.
        filename: Untrusted name from the request.

    Returns:
        The canonical absolute path of the file.

    Raises:
        InvalidInput: For a missing, non-string, or NUL-bearing name.
        AccessDenied: If the canonical path is not a descendant of base_dir.
        NotFound: If nothing regular exists at the canonical path.
    """
    decoded = validate_filename(filename)
    base = Path(base_dir).resolve()
    candidate = (base / decoded).resolve()

    if not _is_path_within(candidate, base):
        logger.warning(
            "Path traversal rejected",
            extra={"requested": filename, "base_dir": str(base)},
        )
        raise AccessDenied("Path traversal detected")

    if not _is_regular_file(candidate):
        raise NotFound("File not found")

    return candidate


def _is_regular_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        # e.g. ENAMETOOLONG
        return False


class AllowList:
    """Exact-membership map from public names to paths under a base directory.

    Entries are validated once, at construction: each must stay inside the
    base directory after resolution.

    Example:
        files = AllowList(Path("files"), {"welcome": "welcome.txt"})
        path = files.resolve("welcome")   # files/welcome.txt
        files.resolve("../etc/passwd")    # AccessDenied, no filesystem access
    """

    def __init__(self, base_dir: Path, entries: Mapping[str, str]) -> None:
        self.base_dir = Path(base_dir).resolve()
        self._entries: dict[str, Path] = {}
        for name, relative in entries.items():
            path = (self.base_dir / relative).resolve()
            if not _is_path_within(path, self.base_dir):
                raise ConfigurationError(
                    f"Allow-list entry {name!r} points outside {self.base_dir}: {relative}"
                )
            self._entries[name] = path

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._entries

    def names(self) -> list[str]:
        return sorted(self._entries)

    def resolve(self, name: Any) -> Path:
        """Return the mapped path for name.

        Raises:
            AccessDenied: If name is not an allow-list key.
            NotFound: If the mapped file is missing.
        """
        if name not in self:
            raise AccessDenied("File not allowed")
        path = self._entries[name]
        if not _is_regular_file(path):
            raise NotFound("File not found")
        return path
