"""
Generator configuration model.

Every pinned value lives here: the language edition, the async runtime's
version and the cargo registry index it was downloaded from.  Bumping any
of them is a one-line change, or an override in rust-project-gen.yml.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ── Pinned defaults ─────────────────────────────────────────────

DEFAULT_EDITION = "2021"
DEFAULT_EXERCISES_ROOT = "exercises"
DEFAULT_OUTPUT_PATH = "rust-project.json"
DEFAULT_SOURCE_EXTENSION = "rs"

# Makes #[cfg(test)] blocks visible to rust-analyzer
DEFAULT_TEST_CFG = "test"

RUNTIME_NAME = "tokio"
RUNTIME_VERSION = "1.28.1"
REGISTRY_INDEX = "github.com-1ecc6299db9ec823"
RUNTIME_ENTRY_FILE = "src/lib.rs"

RUNTIME_FEATURES = (
    "fs",
    "io-util",
    "io-std",
    "macros",
    "net",
    "parking_lot",
    "process",
    "rt",
    "rt-multi-thread",
    "signal",
    "sync",
    "time",
)


class RuntimeCrate(BaseModel):
    """The async runtime injected as the first crate of every document."""

    model_config = ConfigDict(extra="forbid")

    name: str = RUNTIME_NAME
    version: str = RUNTIME_VERSION
    registry_index: str = REGISTRY_INDEX
    entry_file: str = RUNTIME_ENTRY_FILE
    features: list[str] = Field(default_factory=lambda: list(RUNTIME_FEATURES))

    @property
    def package_dir(self) -> str:
        """Directory name cargo unpacks the crate into, e.g. ``tokio-1.28.1``."""
        return f"{self.name}-{self.version}"

    @property
    def cfg_flags(self) -> list[str]:
        return [f'feature="{feature}"' for feature in self.features]


class GeneratorConfig(BaseModel):
    """Settings for one generation run (rust-project-gen.yml).

    All paths are relative to the working directory, and they end up
    verbatim in the generated document.
    """

    model_config = ConfigDict(extra="forbid")

    exercises_root: str = DEFAULT_EXERCISES_ROOT
    output_path: str = DEFAULT_OUTPUT_PATH
    edition: str = DEFAULT_EDITION
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    test_cfg: str = DEFAULT_TEST_CFG
    async_prefix: str = f"{DEFAULT_EXERCISES_ROOT}/async"
    runtime: RuntimeCrate = Field(default_factory=RuntimeCrate)

    @property
    def scan_pattern(self) -> str:
        """The glob the scan is equivalent to, for display."""
        return f"./{self.exercises_root}/**/*"
