"""
Directory scanner — enumerate everything under the exercises root.

Equivalent to the glob ``<root>/**/*`` with hidden entries included, but
with two guarantees a glob does not give:

    - Order is deterministic (sorted per directory, walked top-down),
      so two runs over the same tree produce the same document.
    - An unreadable directory aborts the scan instead of being skipped.
      A document missing crates is worse than no document.

Symlinked directories are followed, as the glob does; a link that leads
back to one of its own parents is an error rather than an endless walk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from rpgen.core.errors import ScanError

logger = logging.getLogger(__name__)


def scan(root: str | Path) -> Iterator[Path]:
    """Lazily yield every file and directory beneath ``root``.

    ``root`` itself is not yielded.  A missing root is an empty tree.

    Raises:
        ScanError: If ``root`` is not a directory, a directory in the
            tree cannot be listed, or a symlink forms a cycle.
    """
    root = Path(root)

    if not root.exists():
        logger.warning("Exercises root %s does not exist, nothing to scan", root)
        return
    if not root.is_dir():
        raise ScanError(f"Exercises root is not a directory: {root}")

    logger.debug("Scanning %s", root)

    # (st_dev, st_ino) of every directory from root down to each pending dirpath
    ancestry = {os.fspath(root): frozenset([_dir_key(os.fspath(root))])}

    walk = os.walk(root, onerror=_raise_scan_error, followlinks=True)
    for dirpath, dirnames, filenames in walk:
        dirnames.sort()
        _track_ancestry(ancestry, dirpath, dirnames)
        base = Path(dirpath)
        for name in sorted(dirnames + filenames):
            yield base / name


def _raise_scan_error(error: OSError) -> None:
    raise ScanError(f"Cannot read {error.filename}: {error.strerror}") from error


def _dir_key(path: str) -> tuple[int, int]:
    try:
        st = os.stat(path)
    except OSError as e:
        raise ScanError(f"Cannot read {path}: {e.strerror}") from e
    return st.st_dev, st.st_ino


def _track_ancestry(
    ancestry: dict[str, frozenset[tuple[int, int]]],
    dirpath: str,
    dirnames: list[str],
) -> None:
    """Record each subdirectory's ancestors; symlinks are followed.

    Raises:
        ScanError: If a subdirectory is one of its own ancestors, i.e. a
            symlink leads back up the tree.
    """
    seen = ancestry.pop(dirpath)
    for name in dirnames:
        child = os.path.join(dirpath, name)
        key = _dir_key(child)
        if key in seen:
            raise ScanError(f"Symlink cycle: {child} leads back to one of its parents")
        ancestry[child] = seen | {key}
