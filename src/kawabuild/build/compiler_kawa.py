"""
Kawa compiler wrapper.

This module runs the Kawa command-line compiler over a batch of Scheme
sources. All sources of a unit are passed to a single invocation:

    java -cp kawa.jar kawa.repl -d <output_dir> -C <source> [<source> ...]

Compiled classes are written below the output directory following each
module's name (e.g. edu/example/App.class).
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..packages.toolchain import KawaToolchain, KawaTools, ToolchainError
from .compiler import CompileResult, CompilerError, ICompiler

logger = logging.getLogger(__name__)

# Kawa reports problems as "file:line:column: message"; warnings and notes
# are prefixed with "warning - " or "note - " and do not fail a build.
KAWA_ERROR_PATTERN = re.compile(r"^.+:\d+:\d+: (?!warning - |note - )")


class CompilerKawa(ICompiler):
    """
    Wrapper for the Kawa batch compiler.

    Kawa exits with a non-zero status when a source fails to compile; the
    compiler messages are captured and returned unmodified.
    """

    def __init__(
        self,
        toolchain: Optional[KawaToolchain] = None,
        jvm_args: Optional[List[str]] = None,
        extra_args: Optional[List[str]] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize compiler.

        Args:
            toolchain: Toolchain locator (defaults to environment lookup)
            jvm_args: Extra JVM arguments (e.g. ['-Xmx512m'])
            extra_args: Extra Kawa options placed before -C
            timeout: Subprocess timeout in seconds (None waits forever)
        """
        self.toolchain = toolchain or KawaToolchain()
        self.jvm_args = list(jvm_args or [])
        self.extra_args = list(extra_args or [])
        self.timeout = timeout

    def build_command(
        self,
        tools: KawaTools,
        output_dir: Path,
        sources: Sequence[Path]
    ) -> List[str]:
        """Build the compiler command line."""
        cmd = tools.base_command(self.jvm_args)
        cmd.extend(["-d", str(Path(output_dir).absolute())])
        cmd.extend(self.extra_args)
        cmd.append("-C")
        cmd.extend(str(Path(source).absolute()) for source in sources)
        return cmd

    def compile(self, output_dir: Path, sources: Sequence[Path]) -> CompileResult:
        """
        Compile a batch of Kawa sources.

        Args:
            output_dir: Destination directory for .class files
            sources: Absolute source file paths

        Returns:
            CompileResult with compilation status

        Raises:
            CompilerError: If the toolchain is missing or the process cannot start
        """
        try:
            tools = self.toolchain.ensure_toolchain()
        except ToolchainError as e:
            raise CompilerError(str(e)) from e

        cmd = self.build_command(tools, output_dir, sources)
        logger.debug(f"Running Kawa compiler: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout
            )
        except KeyboardInterrupt as ke:
            from kawabuild.interrupt_utils import handle_keyboard_interrupt_properly
            handle_keyboard_interrupt_properly(ke)
            raise  # Never reached, but satisfies type checker
        except subprocess.TimeoutExpired as e:
            raise CompilerError(
                f"Kawa compilation timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise CompilerError(f"Failed to run Kawa compiler: {e}") from e

        return CompileResult(
            success=result.returncode == 0 and not self.has_errors(result.stderr),
            output_dir=Path(output_dir),
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
            command=cmd
        )

    @staticmethod
    def has_errors(output: str) -> bool:
        """Check compiler output for error messages.

        Error messages fail the batch even when the exit status is 0.
        """
        return any(KAWA_ERROR_PATTERN.match(line) for line in output.splitlines())
