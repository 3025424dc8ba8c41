"""
Kawa source file discovery and source unit assembly.

This module handles:
- Recursively scanning source roots for Kawa files (.scm, .sld)
- Tolerating missing source roots (warning, zero files)
- Combining explicit files and scanned roots into a SourceUnit
- Optional de-duplication of sources by absolute path
"""

import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

# Kawa source files: Scheme modules (.scm) and R7RS libraries (.sld)
KAWA_FILE_PATTERN = re.compile(r"^.*\.(scm|sld)$")


class UnitKind(str, Enum):
    """Compilation unit kind."""

    MAIN = "main"
    TEST = "test"


@dataclass(frozen=True)
class SourceRoot:
    """A directory scanned recursively for files matching a pattern."""

    directory: Optional[Path]
    pattern: Pattern[str] = field(default=KAWA_FILE_PATTERN)


@dataclass(frozen=True)
class SourceUnit:
    """Source files plus output directory for one compilation pass."""

    kind: UnitKind
    files: Tuple[Path, ...] = ()
    output_directory: Optional[Path] = None

    @property
    def is_empty(self) -> bool:
        """True when the unit has nothing to compile."""
        return len(self.files) == 0


RootLike = Union[SourceRoot, Path, str, None]


class SourceScanner:
    """
    Discovers Kawa sources and assembles them into source units.

    Discovery order is deterministic: within a directory, files come first
    in name order, then subdirectories are descended in name order.
    Symlinked directories are not followed, which keeps cyclic links from
    recursing forever.

    Example usage:
        scanner = SourceScanner()
        unit = scanner.assemble(
            UnitKind.MAIN,
            explicit_files=[Path("extra/Util.scm")],
            roots=[Path("src/main/kawa")],
            output_directory=Path("build/main"),
        )
    """

    def __init__(
        self,
        pattern: Pattern[str] = KAWA_FILE_PATTERN,
        deduplicate: bool = False
    ):
        """
        Initialize source scanner.

        Args:
            pattern: Default file name pattern for roots given as plain paths
            deduplicate: Drop repeated sources (same absolute path)
        """
        self.pattern = pattern
        self.deduplicate = deduplicate

    def resolve(
        self,
        root: Optional[Path],
        pattern: Optional[Pattern[str]] = None
    ) -> List[Path]:
        """
        Find all files under a root whose names match a pattern.

        Args:
            root: Directory to scan (None yields no files)
            pattern: File name pattern (defaults to the scanner's pattern)

        Returns:
            Absolute paths of matching files, in traversal order
        """
        if root is None:
            return []

        pattern = pattern or self.pattern
        root = Path(root).absolute()

        if not root.exists():
            logger.warning(f"Directory not found: {root}")
            return []

        if root.is_file():
            return [root] if pattern.match(root.name) else []

        return list(self._walk(root, pattern))

    def _walk(self, directory: Path, pattern: Pattern[str]) -> Iterable[Path]:
        """Yield matching files below a directory, depth-first."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot read directory {directory}: {e}")
            return

        subdirs = []
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry)
            elif entry.is_file() and pattern.match(entry.name):
                yield directory / entry.name

        for entry in subdirs:
            yield from self._walk(directory / entry.name, pattern)

    def resolve_roots(self, roots: Iterable[RootLike]) -> List[Path]:
        """
        Resolve several roots in the order they were supplied.

        Args:
            roots: SourceRoot instances or plain directories

        Returns:
            Concatenated matching files of all roots
        """
        sources: List[Path] = []
        for root in roots:
            if isinstance(root, SourceRoot):
                sources.extend(self.resolve(root.directory, root.pattern))
            else:
                sources.extend(self.resolve(Path(root) if root is not None else None))
        return sources

    def assemble(
        self,
        kind: UnitKind,
        explicit_files: Sequence[Union[Path, str]] = (),
        roots: Iterable[RootLike] = (),
        output_directory: Optional[Path] = None
    ) -> SourceUnit:
        """
        Build a source unit from explicit files and source roots.

        Explicit files keep the caller's order and come first; scanned files
        follow, root by root.

        Args:
            kind: Unit kind (main or test)
            explicit_files: Files to compile regardless of pattern
            roots: Source roots to scan
            output_directory: Destination for compiled classes

        Returns:
            Assembled SourceUnit
        """
        files = [Path(f).absolute() for f in explicit_files]
        files.extend(self.resolve_roots(roots))

        if self.deduplicate:
            files = self._deduplicate(files)

        return SourceUnit(
            kind=kind,
            files=tuple(files),
            output_directory=Path(output_directory) if output_directory is not None else None
        )

    @staticmethod
    def _deduplicate(files: List[Path]) -> List[Path]:
        """Keep the first occurrence of each resolved path."""
        seen = set()
        unique = []
        for source in files:
            key = source.resolve()
            if key in seen:
                logger.debug(f"Skipping duplicate source: {source}")
                continue
            seen.add(key)
            unique.append(source)
        return unique


def get_kawa_file_list(directory: Optional[Path]) -> List[Path]:
    """
    Return the Kawa source files contained in a directory.

    Args:
        directory: Directory to scan (None or missing yields no files)

    Returns:
        Absolute paths of .scm and .sld files
    """
    return SourceScanner().resolve(directory)
