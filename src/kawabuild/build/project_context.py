"""Host project interface required by the compile orchestrator.

The orchestrator never depends on a concrete project type; hosts expose
their directory layout and silent flag through this interface.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class ProjectContext(ABC):
    """Interface the orchestrator requires from a host project."""

    @abstractmethod
    def main_source_directory(self) -> Path:
        """Root of the main sources (the 'kawa' subdirectory is appended)."""
        pass

    @abstractmethod
    def test_source_directory(self) -> Path:
        """Root of the test sources (the 'kawa' subdirectory is appended)."""
        pass

    @abstractmethod
    def build_main_directory(self) -> Optional[Path]:
        """Output directory for compiled main classes."""
        pass

    @abstractmethod
    def build_test_directory(self) -> Optional[Path]:
        """Output directory for compiled test classes."""
        pass

    @abstractmethod
    def is_silent(self) -> bool:
        """Whether status lines should be suppressed."""
        pass
