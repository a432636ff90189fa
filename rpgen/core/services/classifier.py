"""
Compilation unit classifier — turn scanned paths into crates.

Each ``.rs`` file is its own crate.  Whether a crate depends on the async
runtime is decided by a path predicate, not by reading the file: anything
under the async exercises subtree is tagged.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from pathlib import Path

from rpgen.core.errors import ClassificationError
from rpgen.core.models.config import GeneratorConfig
from rpgen.core.models.project import CompilationUnit, DependencyReference

logger = logging.getLogger(__name__)

# The runtime crate is always inserted first
RUNTIME_CRATE_INDEX = 0

PathPredicate = Callable[[str], bool]


def make_prefix_predicate(prefix: str) -> PathPredicate:
    """Build ``is_async_unit``: a plain string prefix test on the POSIX path.

    ``exercises/async`` therefore also matches ``exercises/async_extra/``.
    """

    def is_async_unit(path: str) -> bool:
        return path.startswith(prefix)

    return is_async_unit


def display_path(path: Path) -> str:
    """POSIX form of ``path`` as valid UTF-8.

    Bytes that are not UTF-8 (surrogate-escaped by the OS layer) become
    U+FFFD, so any filename can be written to the document.
    """
    return os.fsencode(path.as_posix()).decode("utf-8", errors="replace")


def is_source_file(path: Path, extension: str) -> bool:
    """True if ``path`` has the source extension and is not a directory.

    Raises:
        ClassificationError: If the path's metadata cannot be read.
    """
    if path.suffix != f".{extension}":
        return False
    try:
        mode = path.stat().st_mode
    except OSError as e:
        raise ClassificationError(f"Cannot inspect {path}: {e}") from e
    return not stat.S_ISDIR(mode)


def classify(
    path: Path,
    config: GeneratorConfig,
    is_async_unit: PathPredicate,
) -> CompilationUnit | None:
    """Describe ``path`` as a crate, or return None to skip it."""
    if not is_source_file(path, config.source_extension):
        return None

    root_module = display_path(path)
    unit = CompilationUnit(
        root_module=root_module,
        edition=config.edition,
        cfg=[config.test_cfg],
    )
    if is_async_unit(root_module):
        unit.deps = [
            DependencyReference(crate=RUNTIME_CRATE_INDEX, name=config.runtime.name)
        ]
        logger.debug("%s depends on %s", root_module, config.runtime.name)
    return unit
