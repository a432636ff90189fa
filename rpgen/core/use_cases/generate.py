"""
Generate use case — produce rust-project.json.

Ties together config loading, document assembly and the writer.  This is
the one place pipeline errors are caught: they become ``result.error``
with the original message, and the caller decides how to report them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from rpgen.core.config.loader import load_config
from rpgen.core.errors import GenerationError
from rpgen.core.models.config import GeneratorConfig
from rpgen.core.models.project import ProjectDocument
from rpgen.core.persistence.document_file import write_document
from rpgen.core.services.assembler import AssemblyResult, build_document
from rpgen.core.services.toolchain import Toolchain

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    config: GeneratorConfig | None = None
    assembly: AssemblyResult | None = None
    output_path: Path | None = None
    written: bool = False
    error: str | None = None

    @property
    def document(self) -> ProjectDocument | None:
        return self.assembly.document if self.assembly else None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["output_path"] = str(self.output_path)
        result["written"] = self.written

        if self.assembly:
            result["toolchain"] = self.assembly.toolchain.to_dict()
            result["sysroot_src"] = self.assembly.document.sysroot_src
            result["crates"] = {
                "total": len(self.assembly.document.crates),
                "exercises": self.assembly.exercise_count,
                "async": self.assembly.async_count,
            }
            result["paths_scanned"] = self.assembly.paths_scanned

        return result


def run_generate(
    config_path: Path | None = None,
    dry_run: bool = False,
    environ: Mapping[str, str] | None = None,
    on_toolchain: Callable[[Toolchain], None] | None = None,
) -> GenerateResult:
    """Build the project document and write it to the output path.

    Args:
        config_path: Optional explicit path to rust-project-gen.yml.
        dry_run: Assemble the document but don't write it.
        environ: Environment override (default: os.environ).
        on_toolchain: Progress hook, called as soon as the toolchain is
            resolved, even if a later stage fails.

    Returns:
        GenerateResult; ``error`` is set if any stage failed, in which
        case nothing was written.
    """
    result = GenerateResult()

    try:
        config = load_config(config_path)
        result.config = config
        result.output_path = Path(config.output_path)

        logger.info("Scanning %s", config.scan_pattern)
        result.assembly = build_document(config, environ, on_toolchain=on_toolchain)

        if dry_run:
            logger.info("Dry run, not writing %s", result.output_path)
            return result

        write_document(result.assembly.document, result.output_path)
        result.written = True

    except GenerationError as e:
        logger.debug("Generation failed", exc_info=True)
        result.error = str(e)
        return result

    logger.info("Wrote %s", result.output_path)
    return result
