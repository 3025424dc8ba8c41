"""
kawabuild.ini configuration parser.

This module reads the optional per-project kawabuild.ini file. Every key is
optional; missing keys fall back to the standard project layout.

Example kawabuild.ini:
    [project]
    src_main = src/main
    build_main = build/main
    silent = false
    deduplicate = true

    [kawa]
    jar = /opt/kawa/lib/kawa.jar
    jvm_args = -Xss4m
"""

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..build.errors import ConfigurationError


class ProjectConfigError(ConfigurationError):
    """Exception raised for kawabuild.ini configuration errors."""

    pass


@dataclass
class ProjectConfig:
    """Settings read from kawabuild.ini."""

    src_main: str = "src/main"
    src_test: str = "src/test"
    build_main: str = "build/main"
    build_test: str = "build/test"
    silent: bool = False
    deduplicate: bool = False
    compile_tests: bool = True
    kawa_jar: Optional[Path] = None
    java: Optional[Path] = None
    jvm_args: List[str] = field(default_factory=list)

    FILE_NAME = "kawabuild.ini"

    @classmethod
    def load(cls, project_dir: Path) -> "ProjectConfig":
        """
        Load configuration from a project directory.

        Args:
            project_dir: Directory that may contain kawabuild.ini

        Returns:
            ProjectConfig (defaults when the file does not exist)

        Raises:
            ProjectConfigError: If the file cannot be parsed
        """
        ini_path = Path(project_dir) / cls.FILE_NAME
        if not ini_path.exists():
            return cls()
        return cls.from_file(ini_path)

    @classmethod
    def from_file(cls, ini_path: Path) -> "ProjectConfig":
        """
        Parse a kawabuild.ini file.

        Relative jar and java paths are resolved against the file's directory.

        Raises:
            ProjectConfigError: If the file is missing or malformed
        """
        if not ini_path.exists():
            raise ProjectConfigError(f"Configuration file not found: {ini_path}")

        parser = configparser.ConfigParser(
            interpolation=configparser.ExtendedInterpolation()
        )

        try:
            parser.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise ProjectConfigError(f"Failed to parse {ini_path}: {e}") from e

        config = cls()
        base_dir = ini_path.parent

        try:
            if parser.has_section("project"):
                section = parser["project"]
                config.src_main = section.get("src_main", config.src_main)
                config.src_test = section.get("src_test", config.src_test)
                config.build_main = section.get("build_main", config.build_main)
                config.build_test = section.get("build_test", config.build_test)
                config.silent = section.getboolean("silent", config.silent)
                config.deduplicate = section.getboolean("deduplicate", config.deduplicate)
                config.compile_tests = section.getboolean("compile_tests", config.compile_tests)

            if parser.has_section("kawa"):
                section = parser["kawa"]
                jar = section.get("jar", "").strip()
                if jar:
                    config.kawa_jar = base_dir / Path(jar).expanduser()
                java = section.get("java", "").strip()
                if java:
                    config.java = base_dir / Path(java).expanduser()
                config.jvm_args = section.get("jvm_args", "").split()
        except (ValueError, configparser.Error) as e:
            raise ProjectConfigError(f"Invalid value in {ini_path}: {e}") from e

        return config
