"""rust-project-gen — rust-analyzer project descriptor for standalone exercises."""

__version__ = "0.1.0"
