"""Build output directory management.

Creates the main and test output directories before compilation. Creation
is fail-fast and not transactional: directories made before a failing one
are left on disk.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import BuildDirectoryError

logger = logging.getLogger(__name__)


class BuildDirectoryManager:
    """Ensures build output directories exist."""

    def ensure(self, directories: Iterable[Optional[Path]]) -> List[Path]:
        """
        Create every missing directory, including parents.

        Args:
            directories: Directories to ensure (None entries are skipped)

        Returns:
            Directories that were created by this call

        Raises:
            BuildDirectoryError: On the first directory that cannot be created
        """
        created = []
        for directory in directories:
            if directory is None:
                continue

            directory = Path(directory)
            if directory.is_dir():
                continue

            if directory.exists():
                raise BuildDirectoryError(directory, "Not a directory")

            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise BuildDirectoryError(directory, e.strerror or str(e)) from e

            logger.info(f"Created build directory: {directory.absolute()}")
            created.append(directory)

        return created
