"""Exception types raised by the kawabuild build system.

All fatal orchestrator failures derive from KawaBuildError so hosts can
catch a single type. Missing source roots are not errors; they are logged
as warnings and contribute no files.
"""

from pathlib import Path
from typing import List, Optional


class KawaBuildError(Exception):
    """Base exception for kawabuild build failures."""
    pass


class ConfigurationError(KawaBuildError):
    """Raised when the compile operation is not configured correctly.

    The most common cause is executing an orchestrator without a project.
    """
    pass


class BuildDirectoryError(KawaBuildError, OSError):
    """Raised when a build output directory cannot be created."""

    def __init__(self, path: Path, reason: str = ""):
        """
        Initialize build directory error.

        Args:
            path: Directory that could not be created
            reason: Underlying cause, if known
        """
        self.path = Path(path)
        self.reason = reason
        message = f"Could not create build directory: {self.path.absolute()}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class CompilationError(KawaBuildError):
    """Raised when the Kawa compiler reports a failure for a source unit."""

    def __init__(
        self,
        unit: str,
        diagnostics: Optional[List[str]] = None,
        message: Optional[str] = None
    ):
        """
        Initialize compilation error.

        Args:
            unit: Name of the failing unit ('main' or 'test')
            diagnostics: Compiler output, passed through unmodified
            message: Summary message (defaults to a generic one)
        """
        self.unit = unit
        self.diagnostics = list(diagnostics or [])
        if message is None:
            message = f"Kawa compilation of {unit} sources failed"
        super().__init__(message)

    def details(self) -> str:
        """Return the summary message followed by the compiler diagnostics."""
        return "\n".join([str(self)] + self.diagnostics)
