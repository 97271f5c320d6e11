"""Session name sanitization and file path normalization."""

from __future__ import annotations

import posixpath
import re

from sharedtree.errors import InvalidName, InvalidPath

DEFAULT_MAX_NAME_LENGTH = 50

# Characters illegal in filenames on at least one common platform
_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')
# Leading dots would hide the record file from listings
_LEADING_JUNK = re.compile(r"^[\s.]+")


def sanitize_name(name: str, max_length: int = DEFAULT_MAX_NAME_LENGTH) -> str:
    """Turn a human-chosen label into a filesystem-safe session name.

    Illegal characters become underscores; surrounding whitespace and leading
    dots are dropped. Idempotent for every name it accepts.

    Raises:
        InvalidName: If the result is empty or longer than `max_length`.
    """
    if not isinstance(name, str):
        raise InvalidName(name=repr(name), reason="must be a string")

    sanitized = _ILLEGAL_CHARS.sub("_", name.strip())
    sanitized = _LEADING_JUNK.sub("", sanitized).rstrip()

    if not sanitized:
        raise InvalidName(name=name, reason="empty after sanitization")
    if len(sanitized) > max_length:
        raise InvalidName(name=name, reason=f"longer than {max_length} characters")
    return sanitized


def normalize_path(path: str) -> str:
    """Normalize a project-relative file path to a canonical posix form.

    Backslashes become slashes, `./` and `a/../` segments collapse, and
    surrounding whitespace is dropped, so `./src\\App.tsx` and `src/App.tsx`
    name the same file.

    Raises:
        InvalidPath: If the path is empty or refers to the root itself.
    """
    if not isinstance(path, str):
        raise InvalidPath(path=repr(path))
    candidate = path.strip().replace("\\", "/")
    if not candidate:
        raise InvalidPath(path=path)
    normalized = posixpath.normpath(candidate)
    if normalized in (".", "/", "//"):
        raise InvalidPath(path=path)
    return normalized
