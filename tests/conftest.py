"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

FAKE_SYSROOT = "/tmp/fake-sysroot"
FAKE_HOME = "/home/tester"


@pytest.fixture
def project_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fake_env() -> dict[str, str]:
    """An environment that never needs rustc."""
    return {"RUST_SRC_PATH": FAKE_SYSROOT, "HOME": FAKE_HOME}


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Run the test from an empty temp directory with an empty exercises/."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises").mkdir()
    return tmp_path


@pytest.fixture
def exercises_tree(workdir: Path) -> Path:
    """The three-file tree: one async exercise, one plain, one readme."""
    (workdir / "exercises" / "async").mkdir()
    (workdir / "exercises" / "basics").mkdir()
    (workdir / "exercises" / "async" / "foo.rs").write_text("#[tokio::main]\nasync fn main() {}\n")
    (workdir / "exercises" / "basics" / "bar.rs").write_text("fn main() {}\n")
    (workdir / "exercises" / "basics" / "readme.md").write_text("# Basics\n")
    return workdir
