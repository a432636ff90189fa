"""
Toolchain resolver — locate the standard library sources.

rust-analyzer needs ``sysroot_src`` to offer go-to-definition into std.
The location comes from ``RUST_SRC_PATH`` when set, otherwise from
``rustc --print sysroot`` plus the conventional rustlib subpath.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from rpgen.core.errors import ToolchainError

logger = logging.getLogger(__name__)

SRC_PATH_ENV = "RUST_SRC_PATH"
SYSROOT_COMMAND = ["rustc", "--print", "sysroot"]

# <sysroot>/lib/rustlib/src/rust/library
LIBRARY_SUBPATH = ("lib", "rustlib", "src", "rust", "library")


@dataclass
class Toolchain:
    """Where the sysroot source came from."""

    root: str
    sysroot_src: str
    source: str  # "env" or "rustc"

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "sysroot_src": self.sysroot_src,
            "source": self.source,
        }


def resolve_toolchain(environ: Mapping[str, str] | None = None) -> Toolchain:
    """Determine the sysroot source directory.

    Args:
        environ: Environment to read ``RUST_SRC_PATH`` from (default: os.environ).

    Returns:
        Toolchain record. The path is never checked for existence.

    Raises:
        ToolchainError: If rustc cannot be spawned, or fails without output.
    """
    env = os.environ if environ is None else environ

    override = env.get(SRC_PATH_ENV, "")
    if override:
        logger.info("Using %s=%s", SRC_PATH_ENV, override)
        return Toolchain(root="", sysroot_src=override, source="env")

    root = query_sysroot()
    sysroot_src = str(Path(root).joinpath(*LIBRARY_SUBPATH))
    logger.info("Determined toolchain: %s", root)
    return Toolchain(root=root, sysroot_src=sysroot_src, source="rustc")


def query_sysroot() -> str:
    """Run ``rustc --print sysroot`` and return the toolchain root.

    Only the first whitespace-delimited token of stdout is used.  Output
    with no such token is returned as-is.
    """
    logger.debug("Running: %s", " ".join(SYSROOT_COMMAND))
    try:
        result = subprocess.run(SYSROOT_COMMAND, capture_output=True)
    except OSError as e:
        raise ToolchainError(f"Cannot run {SYSROOT_COMMAND[0]}: {e}") from e

    output = result.stdout.decode("utf-8", errors="replace")

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        if not output.strip():
            raise ToolchainError(
                f"{' '.join(SYSROOT_COMMAND)} exited with code {result.returncode}"
                + (f": {stderr}" if stderr else "")
            )
        logger.warning(
            "%s exited with code %d, using its output anyway",
            SYSROOT_COMMAND[0], result.returncode,
        )

    tokens = output.split()
    return tokens[0] if tokens else output
