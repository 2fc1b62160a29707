"""Command line entry point: `gradebook <file>` / `python -m gradebook.cli <file>`."""

from .app import EXIT_DIAGNOSTICS, EXIT_FATAL, EXIT_SUCCESS, main

__all__ = [
    "main",
    "EXIT_SUCCESS",
    "EXIT_FATAL",
    "EXIT_DIAGNOSTICS",
]
