"""Project configuration modules for kawabuild."""

from .project import KawaProject
from .project_config import ProjectConfig, ProjectConfigError

__all__ = [
    "KawaProject",
    "ProjectConfig",
    "ProjectConfigError",
]
