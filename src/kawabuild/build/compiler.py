"""Abstract base class for source-set compilers.

This module defines the interface behind which the external compiler sits,
so the orchestrator can drive any batch compiler and tests can substitute a
fake one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence


@dataclass
class CompileResult:
    """Result of a batch compilation."""
    success: bool
    output_dir: Path
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    command: List[str] = field(default_factory=list)

    def diagnostics(self) -> List[str]:
        """Compiler output lines (stdout, then stderr), unmodified."""
        return self.stdout.splitlines() + self.stderr.splitlines()


class CompilerError(Exception):
    """Base exception for compiler invocation errors."""
    pass


class ICompiler(ABC):
    """Interface for batch compilers.

    Implementations receive every source of a unit in a single call and
    write their artifacts below the output directory.
    """

    @abstractmethod
    def compile(self, output_dir: Path, sources: Sequence[Path]) -> CompileResult:
        """Compile a batch of sources into an output directory.

        Args:
            output_dir: Destination directory for compiled artifacts
            sources: Absolute source file paths

        Returns:
            CompileResult with compilation status

        Raises:
            CompilerError: If the compiler cannot be invoked
        """
        pass
