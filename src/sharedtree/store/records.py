"""Atomic JSON record files.

One JSON document per file. Writes go to a sibling temp file which is then
renamed over the target, so a reader in another process sees either the old
record or the new one, never a partial write. A crashed writer leaves at most a
stray `.tmp_record_*` file, which listings ignore.
"""

from __future__ import annotations

import errno
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from sharedtree.errors import CorruptRecord
from sharedtree.logging import TRACE, get_logger

log = get_logger("store")

TEMP_PREFIX = ".tmp_record_"
RECORD_SUFFIX = ".json"

# os.link failures meaning "no hard links here" rather than a real error
_NO_HARDLINK_ERRNOS = frozenset(
    code
    for code in (
        getattr(errno, name, None)
        for name in ("EPERM", "EOPNOTSUPP", "ENOTSUP", "ENOSYS", "EXDEV", "EMLINK")
    )
    if code is not None
)


def _publish_exclusive(temp_path: str, target: Path) -> None:
    """Move `temp_path` to `target`, failing if `target` already exists.

    A hard link publishes the complete file in one step. Filesystems without
    hard links (FAT, some network shares) fall back to reserving the name with
    O_EXCL and renaming over it, so a reader may briefly see an empty record.

    Raises:
        FileExistsError: If `target` exists.
    """
    try:
        os.link(temp_path, target)
    except FileExistsError:
        raise
    except OSError as exc:
        if exc.errno not in _NO_HARDLINK_ERRNOS:
            raise
        log.debug("Hard links unavailable for %s (%s), using O_EXCL", target, exc)
    else:
        os.unlink(temp_path)
        return

    fd = os.open(target, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    os.close(fd)
    try:
        os.replace(temp_path, target)
    except BaseException:
        os.unlink(target)
        raise


class RecordStore:
    """Read, write and delete JSON records on the local filesystem.

    Holds no state beyond its root; every call goes to disk. Paths may be
    absolute or relative to the root.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str | Path) -> Path:
        target = Path(path)
        if not target.is_absolute():
            target = self._root / target
        return target

    def write(self, path: str | Path, value: Any, *, exclusive: bool = False) -> Path:
        """Serialize `value` and atomically publish it at `path`.

        Args:
            path: Target record path.
            value: JSON-serializable value.
            exclusive: Publish only if the target does not exist yet (see
                `_publish_exclusive`).

        Returns:
            The resolved target path.

        Raises:
            FileExistsError: If `exclusive` and the target exists.
            TypeError, ValueError: If `value` is not JSON-serializable.
            OSError: On filesystem failure. The target is left untouched.
        """
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=str(target.parent),
            prefix=TEMP_PREFIX,
            suffix=RECORD_SUFFIX,
            text=True,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(value, handle, indent=2, sort_keys=True)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())

            if exclusive:
                _publish_exclusive(temp_path, target)
            else:
                os.replace(temp_path, target)
        except BaseException:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        log.log(TRACE, "Wrote record %s", target)
        return target

    def read(self, path: str | Path) -> Any | None:
        """Return the parsed record, or None if the file does not exist.

        Raises:
            CorruptRecord: If the file exists but is not valid UTF-8 JSON.
        """
        target = self.resolve(path)
        try:
            with target.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as exc:
            raise CorruptRecord(path=str(target), reason=f"invalid JSON: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise CorruptRecord(path=str(target), reason="not UTF-8 text") from exc

    def delete(self, path: str | Path) -> bool:
        """Remove the record if present. Returns True if a file was removed."""
        target = self.resolve(path)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        log.log(TRACE, "Deleted record %s", target)
        return True

    def exists(self, path: str | Path) -> bool:
        return self.resolve(path).is_file()

    def list(self, directory: str | Path) -> list[Path]:
        """List record files in a directory, sorted by name.

        Hidden files (including in-flight temp files) are skipped. A missing
        directory lists as empty.
        """
        folder = self.resolve(directory)
        if not folder.is_dir():
            return []
        return sorted(
            entry
            for entry in folder.iterdir()
            if entry.is_file()
            and entry.suffix == RECORD_SUFFIX
            and not entry.name.startswith(".")
        )
