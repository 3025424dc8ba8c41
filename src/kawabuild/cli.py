"""
Command-line interface for kawabuild.

This module provides the `kawabuild` CLI tool for compiling Kawa projects.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from kawabuild import __version__
from kawabuild.build import CompileOptions, CompileOrchestrator, CompilerKawa
from kawabuild.build.errors import ConfigurationError
from kawabuild.cli_utils import ErrorFormatter, PathValidator, ReportPrinter
from kawabuild.config import KawaProject, ProjectConfig
from kawabuild.packages import KawaToolchain

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class CompileArgs:
    """Arguments for the compile command."""

    project_dir: Path
    main_dirs: List[Path] = field(default_factory=list)
    test_dirs: List[Path] = field(default_factory=list)
    build_main: Optional[Path] = None
    build_test: Optional[Path] = None
    kawa_jar: Optional[Path] = None
    java: Optional[Path] = None
    no_tests: bool = False
    dedupe: bool = False
    silent: bool = False
    verbose: bool = False


def setup_logging(verbose: bool = False) -> None:
    """Setup console logging for the kawabuild package."""
    logger = logging.getLogger("kawabuild")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)


def build_options(
    project: KawaProject,
    config: ProjectConfig,
    args: CompileArgs
) -> CompileOptions:
    """Combine project defaults, kawabuild.ini and command-line flags."""
    options = CompileOptions.from_project(
        project,
        deduplicate=args.dedupe or config.deduplicate,
        compile_tests=config.compile_tests and not args.no_tests,
    )
    options = options.with_main_source_directories(*args.main_dirs)
    options = options.with_test_source_directories(*args.test_dirs)
    if args.build_main is not None:
        options = options.with_build_main_directory(args.build_main)
    if args.build_test is not None:
        options = options.with_build_test_directory(args.build_test)
    return options


def compile_command(args: CompileArgs) -> None:
    """Compile Kawa main and test sources.

    Examples:
        kawabuild compile                        # Compile current project
        kawabuild compile examples               # Compile specific project
        kawabuild compile --no-tests             # Main sources only
        kawabuild compile --kawa-jar kawa.jar    # Explicit Kawa jar
        kawabuild compile --verbose              # Verbose output
    """
    setup_logging(args.verbose)

    try:
        config = ProjectConfig.load(args.project_dir)
        project = KawaProject.from_directory(
            args.project_dir,
            config=config,
            silent=True if args.silent else None,
        )

        if not project.is_silent():
            print(f"kawabuild v{__version__}")
            print()

        toolchain = KawaToolchain(
            kawa_jar=args.kawa_jar or config.kawa_jar,
            java=args.java or config.java,
        )
        compiler = CompilerKawa(toolchain, jvm_args=config.jvm_args)

        orchestrator = CompileOrchestrator(
            project=project,
            compiler=compiler,
            options=build_options(project, config, args),
            verbose=args.verbose,
        )

        if args.verbose:
            print(f"Compiling project: {project.work_dir}")
            print()

        report = orchestrator.build()

        if report.success:
            if args.verbose:
                ReportPrinter.print_summary(report)
            sys.exit(0)
        else:
            ErrorFormatter.print_error(
                "Compilation failed!", ReportPrinter.format_failure(report)
            )
            sys.exit(1)

    except ConfigurationError as e:
        ErrorFormatter.handle_configuration_error(e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def main() -> None:
    """kawabuild - Kawa Scheme compilation for JVM projects."""
    parser = argparse.ArgumentParser(
        prog="kawabuild",
        description="kawabuild - compile Kawa Scheme sources to JVM classes",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"kawabuild {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compile command
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile Kawa main and test sources",
    )
    compile_parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    compile_parser.add_argument(
        "--main-dir",
        dest="main_dirs",
        action="append",
        type=Path,
        default=[],
        help="Additional main source directory (repeatable)",
    )
    compile_parser.add_argument(
        "--test-dir",
        dest="test_dirs",
        action="append",
        type=Path,
        default=[],
        help="Additional test source directory (repeatable)",
    )
    compile_parser.add_argument(
        "--build-main",
        type=Path,
        default=None,
        help="Main build directory (default: build/main)",
    )
    compile_parser.add_argument(
        "--build-test",
        type=Path,
        default=None,
        help="Test build directory (default: build/test)",
    )
    compile_parser.add_argument(
        "--kawa-jar",
        type=Path,
        default=None,
        help="Path to kawa.jar (default: KAWA_JAR, KAWA_HOME or kawa on PATH)",
    )
    compile_parser.add_argument(
        "--java",
        type=Path,
        default=None,
        help="Path to the java executable (default: JAVA_HOME or java on PATH)",
    )
    compile_parser.add_argument(
        "--no-tests",
        action="store_true",
        help="Skip compiling test sources",
    )
    compile_parser.add_argument(
        "--dedupe",
        action="store_true",
        help="Compile each source file once even if listed several times",
    )
    compile_parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        help="Suppress status output",
    )
    compile_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Parse arguments
    parsed_args = parser.parse_args()

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    PathValidator.validate_project_dir(parsed_args.project_dir)

    if parsed_args.command == "compile":
        compile_args = CompileArgs(
            project_dir=parsed_args.project_dir,
            main_dirs=parsed_args.main_dirs,
            test_dirs=parsed_args.test_dirs,
            build_main=parsed_args.build_main,
            build_test=parsed_args.build_test,
            kawa_jar=parsed_args.kawa_jar,
            java=parsed_args.java,
            no_tests=parsed_args.no_tests,
            dedupe=parsed_args.dedupe,
            silent=parsed_args.silent,
            verbose=parsed_args.verbose,
        )
        compile_command(compile_args)


if __name__ == "__main__":
    main()
