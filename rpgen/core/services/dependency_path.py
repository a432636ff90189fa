"""
Dependency path resolver — where cargo unpacked the async runtime.

Pure string construction from the pinned runtime settings.  The path is
not checked; a different installed version means updating the config.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from rpgen.core.models.config import RuntimeCrate

HOME_ENV = "HOME"
HOME_FALLBACK = "~/"

# $HOME/.cargo/registry/src/<index>/<name>-<version>/<entry_file>
CARGO_REGISTRY_SUBPATH = (".cargo", "registry", "src")


def runtime_entry_path(
    runtime: RuntimeCrate,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Path to the runtime crate's ``lib.rs`` in the cargo registry cache."""
    env = os.environ if environ is None else environ
    home = env.get(HOME_ENV) or HOME_FALLBACK
    return str(
        Path(home).joinpath(
            *CARGO_REGISTRY_SUBPATH,
            runtime.registry_index,
            runtime.package_dir,
            *Path(runtime.entry_file).parts,
        )
    )
