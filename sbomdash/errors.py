"""Exception hierarchy for sbomdash.

Per-file problems are recoverable and end up as diagnostics; only failing to
prepare the output directory stops a run.
"""

from pathlib import Path
from typing import Optional


class SbomDashError(Exception):
    """Base exception for all sbomdash errors."""
    pass


class SbomLoadError(SbomDashError):
    """An SBOM file could not be read or decoded."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class OutputDirectoryError(SbomDashError):
    """The output directory is missing from the config or cannot be created."""
    pass
