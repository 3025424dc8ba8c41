"""
Compile orchestration for Kawa projects.

This module coordinates a complete compile operation:
- Build directory creation (main and test)
- Source discovery for the main and test units
- Batch compilation of main sources, then test sources
- Aggregation of the per-unit results into a single report

Test sources are only compiled after the main sources succeed, since test
code depends on main code.
"""

import dataclasses
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Pattern, Tuple, Union

from .build_directories import BuildDirectoryManager
from .compilation_executor import BuildResult, CompilationExecutor
from .compiler import ICompiler
from .errors import (
    BuildDirectoryError,
    CompilationError,
    ConfigurationError,
    KawaBuildError,
)
from .project_context import ProjectContext
from .source_scanner import KAWA_FILE_PATTERN, SourceScanner, SourceUnit, UnitKind

PathLike = Union[Path, str]

SUCCESS_MESSAGE = "Kawa compilation finished successfully."


def _paths(values) -> Tuple[Path, ...]:
    return tuple(Path(v) for v in values)


@dataclass(frozen=True)
class CompileOptions:
    """
    Immutable configuration of a compile operation.

    The with_* methods return modified copies, so options can be built
    fluently without ever mutating a shared instance:

        options = (
            CompileOptions.from_project(project)
            .with_main_source_directories(Path("extra/kawa"))
            .with_build_test_directory(None)
        )
    """

    main_source_files: Tuple[Path, ...] = ()
    main_source_directories: Tuple[Path, ...] = ()
    test_source_files: Tuple[Path, ...] = ()
    test_source_directories: Tuple[Path, ...] = ()
    build_main_directory: Optional[Path] = None
    build_test_directory: Optional[Path] = None
    pattern: Pattern[str] = KAWA_FILE_PATTERN
    deduplicate: bool = False
    compile_tests: bool = True

    @classmethod
    def from_project(cls, project: ProjectContext, **overrides) -> "CompileOptions":
        """
        Derive default options from a project.

        Uses the project's build directories and the 'kawa' subdirectory of
        its main and test source directories.

        Args:
            project: Host project
            **overrides: Field values replacing the derived defaults

        Returns:
            CompileOptions for the project
        """
        options = cls(
            main_source_directories=(Path(project.main_source_directory()) / "kawa",),
            test_source_directories=(Path(project.test_source_directory()) / "kawa",),
            build_main_directory=project.build_main_directory(),
            build_test_directory=project.build_test_directory(),
        )
        return dataclasses.replace(options, **overrides) if overrides else options

    def with_main_source_files(self, *files: PathLike) -> "CompileOptions":
        """Add main source files."""
        return dataclasses.replace(
            self, main_source_files=self.main_source_files + _paths(files)
        )

    def with_main_source_directories(self, *directories: PathLike) -> "CompileOptions":
        """Add main source directories."""
        return dataclasses.replace(
            self,
            main_source_directories=self.main_source_directories + _paths(directories)
        )

    def with_test_source_files(self, *files: PathLike) -> "CompileOptions":
        """Add test source files."""
        return dataclasses.replace(
            self, test_source_files=self.test_source_files + _paths(files)
        )

    def with_test_source_directories(self, *directories: PathLike) -> "CompileOptions":
        """Add test source directories."""
        return dataclasses.replace(
            self,
            test_source_directories=self.test_source_directories + _paths(directories)
        )

    def with_build_main_directory(self, directory: Optional[PathLike]) -> "CompileOptions":
        """Set the main build destination."""
        return dataclasses.replace(
            self, build_main_directory=Path(directory) if directory is not None else None
        )

    def with_build_test_directory(self, directory: Optional[PathLike]) -> "CompileOptions":
        """Set the test build destination."""
        return dataclasses.replace(
            self, build_test_directory=Path(directory) if directory is not None else None
        )


class OrchestratorState(Enum):
    """Progress of a compile operation."""

    IDLE = "idle"
    DIRECTORIES_ENSURED = "directories_ensured"
    MAIN_COMPILED = "main_compiled"
    TEST_COMPILED = "test_compiled"
    DONE = "done"


@dataclass
class CompileReport:
    """Aggregated result of a compile operation."""

    success: bool
    message: str
    results: List[BuildResult] = field(default_factory=list)
    build_time: float = 0.0
    failed_unit: Optional[UnitKind] = None
    error: Optional[KawaBuildError] = None

    @property
    def diagnostics(self) -> List[str]:
        """Diagnostics of the first failing unit (empty on success)."""
        for result in self.results:
            if not result.succeeded:
                return result.diagnostics
        return []

    def result_for(self, unit: UnitKind) -> Optional[BuildResult]:
        """Return the result of a unit, or None if it was not attempted."""
        for result in self.results:
            if result.unit == unit:
                return result
        return None


class CompileOrchestrator:
    """
    Orchestrates compilation of a project's main and test Kawa sources.

    State transitions:
        IDLE -> DIRECTORIES_ENSURED -> MAIN_COMPILED -> TEST_COMPILED -> DONE

    A directory failure or a failing main unit jumps straight to DONE.

    Example usage:
        orchestrator = CompileOrchestrator(
            project=KawaProject(Path(".")),
            compiler=CompilerKawa(),
        )
        report = orchestrator.execute()
    """

    def __init__(
        self,
        project: Optional[ProjectContext] = None,
        compiler: Optional[ICompiler] = None,
        options: Optional[CompileOptions] = None,
        directory_manager: Optional[BuildDirectoryManager] = None,
        verbose: bool = False
    ):
        """
        Initialize compile orchestrator.

        Args:
            project: Host project (required before building)
            compiler: Batch compiler (defaults to the Kawa compiler)
            options: Compile options (defaults to options derived from project)
            directory_manager: Build directory manager
            verbose: Print per-phase progress
        """
        self.project = project
        self.compiler = compiler
        self.options = options
        self.directory_manager = directory_manager or BuildDirectoryManager()
        self.verbose = verbose
        self.state = OrchestratorState.IDLE

    def resolve_options(self) -> CompileOptions:
        """
        Return the effective compile options.

        Raises:
            ConfigurationError: If no project was specified
        """
        if self.project is None:
            raise ConfigurationError("A project must be specified.")
        if self.options is not None:
            return self.options
        return CompileOptions.from_project(self.project)

    def assemble_units(self, options: CompileOptions) -> Tuple[SourceUnit, SourceUnit]:
        """Assemble the main and test source units."""
        scanner = SourceScanner(pattern=options.pattern, deduplicate=options.deduplicate)
        main_unit = scanner.assemble(
            UnitKind.MAIN,
            options.main_source_files,
            options.main_source_directories,
            options.build_main_directory,
        )
        test_unit = scanner.assemble(
            UnitKind.TEST,
            options.test_source_files,
            options.test_source_directories,
            options.build_test_directory,
        )
        return main_unit, test_unit

    def build(self) -> CompileReport:
        """
        Run the compile operation and report the outcome.

        Directory and compilation failures are returned as an unsuccessful
        report rather than raised.

        Returns:
            CompileReport describing the operation

        Raises:
            ConfigurationError: If no project was specified
        """
        options = self.resolve_options()
        silent = self.project.is_silent()
        start_time = time.time()
        results: List[BuildResult] = []
        self.state = OrchestratorState.IDLE

        # Phase 1: build directories
        if self.verbose and not silent:
            print("[1/3] Preparing build directories...")

        try:
            self.directory_manager.ensure([
                options.build_main_directory,
                options.build_test_directory,
            ])
        except BuildDirectoryError as e:
            self.state = OrchestratorState.DONE
            return CompileReport(
                success=False,
                message=str(e),
                build_time=time.time() - start_time,
                error=e,
            )

        self.state = OrchestratorState.DIRECTORIES_ENSURED
        main_unit, test_unit = self.assemble_units(options)
        executor = CompilationExecutor(self._get_compiler())

        # Phase 2: main sources
        if self.verbose and not silent:
            print(f"[2/3] Main: {len(main_unit.files)} files")

        if self._will_compile(main_unit):
            if not silent:
                print("Compiling Kawa main sources.")
            main_result = executor.invoke(main_unit)
            if not main_result.skipped:
                results.append(main_result)
            if not main_result.succeeded:
                return self._failure(main_result, results, start_time)

        self.state = OrchestratorState.MAIN_COMPILED

        # Phase 3: test sources
        if options.compile_tests:
            if self.verbose and not silent:
                print(f"[3/3] Test: {len(test_unit.files)} files")

            if self._will_compile(test_unit):
                if not silent:
                    print("Compiling Kawa test sources.")
                test_result = executor.invoke(test_unit)
                if not test_result.skipped:
                    results.append(test_result)
                if not test_result.succeeded:
                    return self._failure(test_result, results, start_time)
        elif self.verbose and not silent:
            print("[3/3] Test compilation disabled")

        self.state = OrchestratorState.TEST_COMPILED

        if not silent:
            print(SUCCESS_MESSAGE)

        self.state = OrchestratorState.DONE
        return CompileReport(
            success=True,
            message=SUCCESS_MESSAGE,
            results=results,
            build_time=time.time() - start_time,
        )

    def execute(self) -> CompileReport:
        """
        Run the compile operation, raising on failure.

        Returns:
            CompileReport of the successful operation

        Raises:
            ConfigurationError: If no project was specified
            BuildDirectoryError: If a build directory cannot be created
            CompilationError: If the compiler fails for a unit
        """
        report = self.build()
        if not report.success and report.error is not None:
            raise report.error
        return report

    @staticmethod
    def _will_compile(unit: SourceUnit) -> bool:
        """True when the unit has sources and a destination."""
        return not unit.is_empty and unit.output_directory is not None

    def _failure(
        self,
        result: BuildResult,
        results: List[BuildResult],
        start_time: float
    ) -> CompileReport:
        """Finish the operation with a failed unit."""
        self.state = OrchestratorState.DONE
        error = CompilationError(result.unit.value, result.diagnostics)
        return CompileReport(
            success=False,
            message=str(error),
            results=results,
            build_time=time.time() - start_time,
            failed_unit=result.unit,
            error=error,
        )

    def _get_compiler(self) -> ICompiler:
        """Return the configured compiler, creating the Kawa compiler lazily."""
        if self.compiler is None:
            from .compiler_kawa import CompilerKawa
            self.compiler = CompilerKawa()
        return self.compiler
