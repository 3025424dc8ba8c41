"""Toolchain discovery for the Kawa compiler.

This module locates the Kawa jar (or a `kawa` launcher script) and the Java
runtime needed to run it. Nothing is downloaded: the toolchain must already
be installed.

Lookup order:
1. Explicit paths (from kawabuild.ini or the command line)
2. KAWA_JAR / KAWA_HOME and JAVA_HOME environment variables
3. `java` and `kawa` executables on PATH
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional


class ToolchainError(Exception):
    """Raised when the Kawa toolchain cannot be located."""

    pass


@dataclass(frozen=True)
class KawaTools:
    """Resolved toolchain executables."""

    java: Optional[Path]
    kawa_jar: Optional[Path]
    kawa_launcher: Optional[Path]

    def base_command(self, jvm_args: Optional[List[str]] = None) -> List[str]:
        """Command prefix that starts the Kawa REPL/compiler entry point."""
        if self.java is not None and self.kawa_jar is not None:
            cmd = [str(self.java)]
            cmd.extend(jvm_args or [])
            cmd.extend(["-cp", str(self.kawa_jar), "kawa.repl"])
            return cmd
        if self.kawa_launcher is not None:
            return [str(self.kawa_launcher)]
        raise ToolchainError("No usable Kawa toolchain")


class KawaToolchain:
    """Locates the Kawa compiler and Java runtime."""

    # Kawa version the example project is tested against
    VERSION = "3.1.1"

    JAR_NAMES = ["kawa.jar", f"kawa-{VERSION}.jar"]

    def __init__(
        self,
        kawa_jar: Optional[Path] = None,
        java: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None
    ):
        """Initialize toolchain locator.

        Args:
            kawa_jar: Explicit path to the Kawa jar
            java: Explicit path to the java executable
            env: Environment to read (defaults to os.environ)
        """
        self.kawa_jar = Path(kawa_jar) if kawa_jar else None
        self.java = Path(java) if java else None
        self.env = os.environ if env is None else env
        self._tools: Optional[KawaTools] = None

    def find_kawa_jar(self) -> Optional[Path]:
        """Find the Kawa jar.

        Returns:
            Path to the jar, or None if not found

        Raises:
            ToolchainError: If an explicitly configured jar does not exist
        """
        if self.kawa_jar is not None:
            if not self.kawa_jar.is_file():
                raise ToolchainError(f"Kawa jar not found: {self.kawa_jar}")
            return self.kawa_jar

        env_jar = self.env.get("KAWA_JAR")
        if env_jar:
            jar = Path(env_jar)
            if not jar.is_file():
                raise ToolchainError(f"KAWA_JAR points to a missing file: {jar}")
            return jar

        kawa_home = self.env.get("KAWA_HOME")
        if kawa_home:
            for name in self.JAR_NAMES:
                jar = Path(kawa_home) / "lib" / name
                if jar.is_file():
                    return jar

        return None

    def find_java(self) -> Optional[Path]:
        """Find the java executable.

        Raises:
            ToolchainError: If an explicitly configured java does not exist
        """
        if self.java is not None:
            if not self.java.exists():
                raise ToolchainError(f"java not found: {self.java}")
            return self.java

        java_home = self.env.get("JAVA_HOME")
        if java_home:
            for name in ("java", "java.exe"):
                candidate = Path(java_home) / "bin" / name
                if candidate.exists():
                    return candidate

        found = shutil.which("java", path=self.env.get("PATH"))
        return Path(found) if found else None

    def find_kawa_launcher(self) -> Optional[Path]:
        """Find a `kawa` launcher script on PATH."""
        kawa_home = self.env.get("KAWA_HOME")
        if kawa_home:
            candidate = Path(kawa_home) / "bin" / "kawa"
            if candidate.exists():
                return candidate

        found = shutil.which("kawa", path=self.env.get("PATH"))
        return Path(found) if found else None

    def ensure_toolchain(self) -> KawaTools:
        """Resolve the toolchain, preferring java + jar over the launcher.

        Returns:
            Resolved KawaTools

        Raises:
            ToolchainError: If neither java + jar nor a launcher is available
        """
        if self._tools is not None:
            return self._tools

        jar = self.find_kawa_jar()
        java = self.find_java()
        launcher = None

        if jar is None or java is None:
            launcher = self.find_kawa_launcher()
            if launcher is None:
                missing = []
                if jar is None:
                    missing.append("Kawa jar (set KAWA_JAR or KAWA_HOME)")
                if java is None:
                    missing.append("java (set JAVA_HOME or add java to PATH)")
                raise ToolchainError(
                    "Kawa toolchain not found. Missing: " + ", ".join(missing)
                )

        self._tools = KawaTools(java=java, kawa_jar=jar, kawa_launcher=launcher)
        return self._tools

    def is_available(self) -> bool:
        """Check whether a usable toolchain can be resolved."""
        try:
            self.ensure_toolchain()
            return True
        except ToolchainError:
            return False
