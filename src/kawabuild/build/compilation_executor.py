"""Compilation Executor.

This module adapts a SourceUnit to the compiler calling convention and
captures the outcome as a BuildResult.

Design:
    - One batch call per unit (all sources at once, never file by file)
    - Empty units or units without an output directory are no-ops
    - Compiler exceptions become failed results; nothing is retried
"""

import time
from dataclasses import dataclass, field
from typing import List

from .compiler import CompilerError, ICompiler
from .source_scanner import SourceUnit, UnitKind


@dataclass
class BuildResult:
    """Outcome of compiling one source unit."""

    unit: UnitKind
    succeeded: bool
    diagnostics: List[str] = field(default_factory=list)
    skipped: bool = False
    build_time: float = 0.0


class CompilationExecutor:
    """Invokes a compiler on source units.

    This class handles:
    - Skipping units with nothing to compile
    - Submitting the unit's sources as a single batch
    - Converting compiler failures and exceptions into BuildResults
    """

    def __init__(self, compiler: ICompiler):
        """Initialize compilation executor.

        Args:
            compiler: Compiler used for every unit
        """
        self.compiler = compiler

    def invoke(self, unit: SourceUnit) -> BuildResult:
        """Compile a source unit.

        Args:
            unit: Source unit to compile

        Returns:
            BuildResult for the unit
        """
        if unit.is_empty or unit.output_directory is None:
            return BuildResult(unit=unit.kind, succeeded=True, skipped=True)

        start_time = time.time()

        try:
            result = self.compiler.compile(unit.output_directory, list(unit.files))
        except KeyboardInterrupt as ke:
            from kawabuild.interrupt_utils import handle_keyboard_interrupt_properly
            handle_keyboard_interrupt_properly(ke)
            raise  # Never reached, but satisfies type checker
        except CompilerError as e:
            return BuildResult(
                unit=unit.kind,
                succeeded=False,
                diagnostics=[str(e)],
                build_time=time.time() - start_time
            )
        except Exception as e:
            return BuildResult(
                unit=unit.kind,
                succeeded=False,
                diagnostics=[f"{type(e).__name__}: {e}"],
                build_time=time.time() - start_time
            )

        diagnostics = result.diagnostics()
        if not result.success and not diagnostics:
            diagnostics = [f"Compiler exited with status {result.returncode}"]

        return BuildResult(
            unit=unit.kind,
            succeeded=result.success,
            diagnostics=diagnostics,
            build_time=time.time() - start_time
        )
