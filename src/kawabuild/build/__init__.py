"""
Build system components for kawabuild.

This module provides the build system implementation including:
- Kawa source discovery and source unit assembly
- Build directory creation
- Batch compilation through the Kawa compiler
- Compile orchestration (main, then test)
"""

from .build_directories import BuildDirectoryManager
from .compilation_executor import BuildResult, CompilationExecutor
from .compiler import CompileResult, CompilerError, ICompiler
from .compiler_kawa import CompilerKawa
from .errors import (
    BuildDirectoryError,
    CompilationError,
    ConfigurationError,
    KawaBuildError,
)
from .orchestrator import (
    CompileOptions,
    CompileOrchestrator,
    CompileReport,
    OrchestratorState,
)
from .project_context import ProjectContext
from .source_scanner import (
    KAWA_FILE_PATTERN,
    SourceRoot,
    SourceScanner,
    SourceUnit,
    UnitKind,
    get_kawa_file_list,
)

__all__ = [
    'KAWA_FILE_PATTERN',
    'BuildDirectoryError',
    'BuildDirectoryManager',
    'BuildResult',
    'CompilationError',
    'CompilationExecutor',
    'CompileOptions',
    'CompileOrchestrator',
    'CompileReport',
    'CompileResult',
    'CompilerError',
    'CompilerKawa',
    'ConfigurationError',
    'ICompiler',
    'KawaBuildError',
    'OrchestratorState',
    'ProjectContext',
    'SourceRoot',
    'SourceScanner',
    'SourceUnit',
    'UnitKind',
    'get_kawa_file_list',
]
