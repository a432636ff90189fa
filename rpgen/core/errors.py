"""
Error taxonomy for the generation pipeline.

Every stage raises a subclass of GenerationError.  Nothing inside the
pipeline recovers from these; the generate use case is the only place
that catches them and turns them into a user-facing message.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for every fatal generation failure."""


class ConfigError(GenerationError):
    """Raised when the generator configuration is invalid or unreadable."""


class ToolchainError(GenerationError):
    """Raised when the sysroot cannot be resolved from the toolchain."""


class ScanError(GenerationError):
    """Raised when the exercises tree cannot be walked."""


class ClassificationError(GenerationError):
    """Raised when a candidate path's metadata cannot be read."""


class DocumentError(GenerationError):
    """Raised when an assembled document violates its invariants."""


class WriteError(GenerationError):
    """Raised when the output file cannot be created or overwritten."""
