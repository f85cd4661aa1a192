"""FileVisitor: lazy, cycle-safe enumeration of the files under a root.

The walk is depth-first over an explicit stack, with directory entries
taken in name order. Regular files are yielded; directories are descended
once per physical directory (keyed by device and inode); everything else
is skipped with a warning.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional, Union

from .exceptions import FatalRootError
from .logging_config import get_logger

logger = get_logger(__name__)


def _list_dir(path: Union[str, Path]) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


class FileVisitor:
    """Enumerates regular files below a root path.

    Args:
        extensions: Only yield files with these suffixes (case-insensitive).
            None or empty yields every regular file. A root that is itself
            a file is always yielded.
        follow_symlinks: Resolve symlinked entries; when False they are
            skipped with a warning
    """

    def __init__(
        self, extensions: Optional[Iterable[str]] = None, follow_symlinks: bool = True
    ) -> None:
        self.extensions = frozenset(ext.lower() for ext in extensions) if extensions else None
        self.follow_symlinks = follow_symlinks
        self.skipped = 0

    def visit(self, root: Union[str, Path]) -> Iterator[Path]:
        """Validate ``root`` and return a lazy iterator over its files.

        Raises:
            FatalRootError: If the root does not exist, cannot be listed,
                or is neither a directory nor a regular file
        """
        root = Path(root)
        try:
            root_stat = root.stat()
        except FileNotFoundError:
            raise FatalRootError(root, "path does not exist")
        except OSError as e:
            raise FatalRootError(root, e.strerror or str(e))

        if stat.S_ISREG(root_stat.st_mode):
            logger.debug(f"Root is a single file: {root}")
            return iter([root])

        if not stat.S_ISDIR(root_stat.st_mode):
            raise FatalRootError(root, "not a regular file or directory")

        try:
            entries = _list_dir(root)
        except OSError as e:
            raise FatalRootError(root, e.strerror or str(e))

        return self._walk(root, root_stat, entries)

    def _walk(
        self, root: Path, root_stat: os.stat_result, entries: list[os.DirEntry]
    ) -> Iterator[Path]:
        visited = {(root_stat.st_dev, root_stat.st_ino)}
        logger.debug(f"Exploring directory: {root}")
        stack = list(reversed(entries))

        while stack:
            entry = stack.pop()
            path = Path(entry.path)

            try:
                if entry.is_symlink() and not self.follow_symlinks:
                    self._skip(path, "symbolic link (follow_symlinks disabled)")
                    continue
                entry_stat = entry.stat(follow_symlinks=True)
            except OSError as e:
                self._skip(path, e.strerror or str(e))
                continue

            if stat.S_ISREG(entry_stat.st_mode):
                if self._accepts(path):
                    yield path
                else:
                    logger.debug(f"Skipped (extension): {path}")
                continue

            if stat.S_ISDIR(entry_stat.st_mode):
                key = (entry_stat.st_dev, entry_stat.st_ino)
                if key in visited:
                    self._skip(path, "directory already visited (traversal cycle)")
                    continue
                visited.add(key)
                try:
                    children = _list_dir(path)
                except OSError as e:
                    self._skip(path, e.strerror or str(e))
                    continue
                logger.debug(f"Exploring directory: {path}")
                stack.extend(reversed(children))
                continue

            self._skip(path, "not a regular file or directory")

    def _accepts(self, path: Path) -> bool:
        return self.extensions is None or path.suffix.lower() in self.extensions

    def _skip(self, path: Path, reason: str) -> None:
        self.skipped += 1
        logger.warning(f"Skipping {path}: {reason}")
