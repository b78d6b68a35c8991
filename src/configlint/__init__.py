"""configlint - cross-artifact consistency checks for config structs."""

__version__ = "0.1.0"
