"""
Project document assembler — drive the pipeline for one run.

    toolchain → runtime crate (index 0) → scan → classify → validate

The document is only returned once the whole scan has succeeded; any
error propagates and nothing is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from rpgen.core.models.config import GeneratorConfig
from rpgen.core.models.project import CompilationUnit, ProjectDocument
from rpgen.core.services.classifier import (
    RUNTIME_CRATE_INDEX,
    PathPredicate,
    classify,
    make_prefix_predicate,
)
from rpgen.core.services.dependency_path import runtime_entry_path
from rpgen.core.services.scanner import scan
from rpgen.core.services.toolchain import Toolchain, resolve_toolchain

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    """An assembled document plus what was learned building it."""

    document: ProjectDocument
    toolchain: Toolchain
    paths_scanned: int = 0
    skipped: list[str] = field(default_factory=list)

    @property
    def exercise_count(self) -> int:
        """Crates discovered on disk (excludes the runtime crate)."""
        return len(self.document.crates) - 1

    @property
    def async_count(self) -> int:
        return sum(1 for unit in self.document.crates if unit.deps)


def runtime_unit(
    config: GeneratorConfig,
    environ: Mapping[str, str] | None = None,
) -> CompilationUnit:
    """The synthetic crate standing in for the async runtime."""
    return CompilationUnit(
        root_module=runtime_entry_path(config.runtime, environ),
        edition=config.edition,
        cfg=config.runtime.cfg_flags,
    )


def build_document(
    config: GeneratorConfig,
    environ: Mapping[str, str] | None = None,
    is_async_unit: PathPredicate | None = None,
    on_toolchain: Callable[[Toolchain], None] | None = None,
) -> AssemblyResult:
    """Assemble the full rust-project document.

    Args:
        config: Generator settings.
        environ: Environment for RUST_SRC_PATH and HOME (default: os.environ).
        is_async_unit: Override the async predicate (default: prefix test
            on ``config.async_prefix``).
        on_toolchain: Called once the toolchain is resolved, before the
            scan starts (progress reporting).

    Raises:
        GenerationError: Any failure from resolution, scanning,
            classification or reference validation.
    """
    toolchain = resolve_toolchain(environ)
    if on_toolchain is not None:
        on_toolchain(toolchain)

    document = ProjectDocument(sysroot_src=toolchain.sysroot_src)
    if not toolchain.sysroot_src:
        logger.warning("Resolved an empty sysroot_src, std cross-references will not work")

    index = document.add_unit(runtime_unit(config, environ))
    assert index == RUNTIME_CRATE_INDEX

    if is_async_unit is None:
        is_async_unit = make_prefix_predicate(config.async_prefix)

    result = AssemblyResult(document=document, toolchain=toolchain)

    for path in scan(config.exercises_root):
        result.paths_scanned += 1
        unit = classify(path, config, is_async_unit)
        if unit is None:
            result.skipped.append(path.as_posix())
            continue
        document.add_unit(unit)

    document.validate_references()

    logger.info(
        "Assembled %d crates from %d paths (%d async)",
        len(document.crates), result.paths_scanned, result.async_count,
    )
    return result
