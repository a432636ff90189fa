"""
Tests for toolchain and dependency path resolution.
"""

import subprocess
from pathlib import Path

import pytest

from rpgen.core.errors import ToolchainError
from rpgen.core.models.config import RuntimeCrate
from rpgen.core.services import toolchain
from rpgen.core.services.dependency_path import runtime_entry_path
from rpgen.core.services.toolchain import resolve_toolchain


def _fake_run(stdout: bytes, returncode: int = 0, stderr: bytes = b""):
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    run.calls = calls
    return run


class TestResolveToolchain:
    """Tests for resolve_toolchain()."""

    def test_env_override_verbatim(self, monkeypatch):
        fake = _fake_run(b"/should/not/be/used\n")
        monkeypatch.setattr(toolchain.subprocess, "run", fake)
        tc = resolve_toolchain({"RUST_SRC_PATH": "/tmp/fake-sysroot"})
        assert tc.sysroot_src == "/tmp/fake-sysroot"
        assert tc.source == "env"
        assert fake.calls == []

    def test_env_override_not_validated(self):
        tc = resolve_toolchain({"RUST_SRC_PATH": "/does/not/exist"})
        assert tc.sysroot_src == "/does/not/exist"

    def test_empty_env_falls_back_to_rustc(self, monkeypatch):
        fake = _fake_run(b"/opt/rust/toolchains/stable\n")
        monkeypatch.setattr(toolchain.subprocess, "run", fake)
        tc = resolve_toolchain({"RUST_SRC_PATH": ""})
        assert tc.source == "rustc"
        assert fake.calls == [["rustc", "--print", "sysroot"]]

    def test_rustc_sysroot(self, monkeypatch):
        monkeypatch.setattr(
            toolchain.subprocess, "run", _fake_run(b"/opt/rust/toolchains/stable\n")
        )
        tc = resolve_toolchain({})
        assert tc.root == "/opt/rust/toolchains/stable"
        assert tc.sysroot_src == str(
            Path("/opt/rust/toolchains/stable/lib/rustlib/src/rust/library")
        )

    def test_first_token_only(self, monkeypatch):
        monkeypatch.setattr(
            toolchain.subprocess, "run", _fake_run(b"  /opt/rust extra words\nmore\n")
        )
        assert resolve_toolchain({}).root == "/opt/rust"

    def test_no_token_uses_raw_output(self, monkeypatch):
        monkeypatch.setattr(toolchain.subprocess, "run", _fake_run(b"   \n"))
        assert resolve_toolchain({}).root == "   \n"

    def test_undecodable_output_is_lenient(self, monkeypatch):
        monkeypatch.setattr(toolchain.subprocess, "run", _fake_run(b"/opt/r\xffst\n"))
        assert resolve_toolchain({}).root == "/opt/r\ufffdst"

    def test_rustc_missing_is_fatal(self, monkeypatch):
        def run(cmd, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", "rustc")

        monkeypatch.setattr(toolchain.subprocess, "run", run)
        with pytest.raises(ToolchainError, match="Cannot run rustc"):
            resolve_toolchain({})

    def test_failure_without_output_is_fatal(self, monkeypatch):
        monkeypatch.setattr(
            toolchain.subprocess, "run",
            _fake_run(b"", returncode=1, stderr=b"error: no default toolchain"),
        )
        with pytest.raises(ToolchainError, match="no default toolchain"):
            resolve_toolchain({})

    def test_failure_with_output_is_used(self, monkeypatch):
        monkeypatch.setattr(
            toolchain.subprocess, "run", _fake_run(b"/opt/rust\n", returncode=1)
        )
        assert resolve_toolchain({}).root == "/opt/rust"


class TestRuntimeEntryPath:
    """Tests for runtime_entry_path()."""

    def test_under_home(self):
        path = runtime_entry_path(RuntimeCrate(), {"HOME": "/home/tester"})
        assert path == str(Path(
            "/home/tester/.cargo/registry/src/github.com-1ecc6299db9ec823"
            "/tokio-1.28.1/src/lib.rs"
        ))

    def test_home_missing_uses_placeholder(self):
        path = runtime_entry_path(RuntimeCrate(), {})
        assert path.startswith(str(Path("~/.cargo/registry/src")))

    def test_home_empty_uses_placeholder(self):
        path = runtime_entry_path(RuntimeCrate(), {"HOME": ""})
        assert path.startswith("~")

    def test_pinned_version_is_used(self):
        rt = RuntimeCrate(version="1.40.0", registry_index="index.crates.io-6f17d22bba15001f")
        path = runtime_entry_path(rt, {"HOME": "/h"})
        assert "index.crates.io-6f17d22bba15001f" in path
        assert "tokio-1.40.0" in path
