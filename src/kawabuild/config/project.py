"""
Project model consumed by the compile orchestrator.

The orchestrator only needs a handful of directories and the silent flag
from its host, so hosts implement the small ProjectContext interface.
KawaProject is the standard directory layout used by the CLI:

    <work_dir>/
        kawabuild.ini        (optional)
        src/main/kawa/       main sources
        src/test/kawa/       test sources
        build/main/          compiled main classes
        build/test/          compiled test classes
"""

from pathlib import Path
from typing import Optional

from ..build.project_context import ProjectContext
from .project_config import ProjectConfig


class KawaProject(ProjectContext):
    """Standard Kawa project layout rooted at a work directory."""

    def __init__(
        self,
        work_dir: Path,
        src_main: str = "src/main",
        src_test: str = "src/test",
        build_main: str = "build/main",
        build_test: str = "build/test",
        silent: bool = False
    ):
        """
        Initialize project.

        Args:
            work_dir: Project root directory
            src_main: Main source root, relative to work_dir
            src_test: Test source root, relative to work_dir
            build_main: Main build directory, relative to work_dir
            build_test: Test build directory, relative to work_dir
            silent: Suppress status output
        """
        self.work_dir = Path(work_dir).absolute()
        self._src_main = self.work_dir / src_main
        self._src_test = self.work_dir / src_test
        self._build_main = self.work_dir / build_main
        self._build_test = self.work_dir / build_test
        self.silent = silent

    @classmethod
    def from_directory(
        cls,
        work_dir: Path,
        config: Optional[ProjectConfig] = None,
        silent: Optional[bool] = None
    ) -> "KawaProject":
        """
        Create a project from a directory, reading kawabuild.ini if present.

        Args:
            work_dir: Project root directory
            config: Already loaded configuration (read from work_dir if None)
            silent: Overrides the silent setting from the config file

        Returns:
            Configured KawaProject

        Raises:
            ProjectConfigError: If kawabuild.ini exists but is invalid
        """
        if config is None:
            config = ProjectConfig.load(Path(work_dir))
        return cls(
            work_dir,
            src_main=config.src_main,
            src_test=config.src_test,
            build_main=config.build_main,
            build_test=config.build_test,
            silent=config.silent if silent is None else silent
        )

    def main_source_directory(self) -> Path:
        return self._src_main

    def test_source_directory(self) -> Path:
        return self._src_test

    def build_main_directory(self) -> Optional[Path]:
        return self._build_main

    def build_test_directory(self) -> Optional[Path]:
        return self._build_test

    def is_silent(self) -> bool:
        return self.silent

    def __repr__(self) -> str:
        return f"KawaProject({str(self.work_dir)!r})"
