"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from rpgen.core.models import ProjectDocument, CompilationUnit, GeneratorConfig
"""

from rpgen.core.models.config import GeneratorConfig, RuntimeCrate
from rpgen.core.models.project import (
    CompilationUnit,
    DependencyReference,
    ProjectDocument,
)

__all__ = [
    # project.py
    "CompilationUnit",
    "DependencyReference",
    # config.py
    "GeneratorConfig",
    "ProjectDocument",
    "RuntimeCrate",
]
