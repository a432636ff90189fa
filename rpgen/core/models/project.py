"""
Project document model — the contents of rust-project.json.

rust-analyzer reads this file when a workspace has no Cargo.toml.  Each
crate is described on its own; dependencies point at other crates by
their position in the ``crates`` list.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from rpgen.core.errors import DocumentError


class DependencyReference(BaseModel):
    """An edge to another crate in the same document, by index."""

    crate: int
    name: str


class CompilationUnit(BaseModel):
    """One independently compiled source file (a "crate" to the IDE)."""

    root_module: str
    edition: str
    deps: list[DependencyReference] = Field(default_factory=list)
    cfg: list[str] = Field(default_factory=list)

    @property
    def dependency_names(self) -> list[str]:
        return [d.name for d in self.deps]


class ProjectDocument(BaseModel):
    """Root document — built fresh on every run, written once.

    Field names and order match the rust-project.json format.
    """

    sysroot_src: str = ""
    crates: list[CompilationUnit] = Field(default_factory=list)

    def add_unit(self, unit: CompilationUnit) -> int:
        """Append a crate and return the index other crates refer to it by."""
        self.crates.append(unit)
        return len(self.crates) - 1

    def validate_references(self) -> None:
        """Check that every dependency index points inside ``crates``.

        Raises:
            DocumentError: On the first dangling reference.
        """
        total = len(self.crates)
        for position, unit in enumerate(self.crates):
            for dep in unit.deps:
                if not 0 <= dep.crate < total:
                    raise DocumentError(
                        f"Crate {position} ({unit.root_module}) depends on "
                        f"'{dep.name}' at index {dep.crate}, "
                        f"but the document has {total} crates"
                    )

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
