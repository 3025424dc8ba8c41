"""Unit tests for Kawa toolchain discovery."""

from pathlib import Path
from unittest.mock import patch

import pytest

from kawabuild.packages.toolchain import KawaToolchain, KawaTools, ToolchainError


@pytest.fixture
def kawa_home(tmp_path):
    """KAWA_HOME layout with lib/kawa.jar and bin/kawa."""
    home = tmp_path / "kawa"
    (home / "lib").mkdir(parents=True)
    (home / "bin").mkdir()
    (home / "lib" / "kawa.jar").write_bytes(b"PK")
    (home / "bin" / "kawa").write_text("#!/bin/sh\n")
    return home


@pytest.fixture
def java_home(tmp_path):
    """JAVA_HOME layout with bin/java."""
    home = tmp_path / "jdk"
    (home / "bin").mkdir(parents=True)
    (home / "bin" / "java").write_text("#!/bin/sh\n")
    return home


@pytest.fixture
def no_path():
    """Nothing is found on PATH."""
    with patch("kawabuild.packages.toolchain.shutil.which", return_value=None) as which:
        yield which


class TestKawaTools:
    """Test command prefix construction."""

    def test_java_and_jar(self):
        """Test java -cp <jar> kawa.repl with JVM args."""
        tools = KawaTools(java=Path("java"), kawa_jar=Path("kawa.jar"), kawa_launcher=None)

        assert tools.base_command(["-Xss4m"]) == [
            "java", "-Xss4m", "-cp", "kawa.jar", "kawa.repl"
        ]

    def test_jar_preferred_over_launcher(self):
        """Test that java + jar wins when a launcher is also known."""
        tools = KawaTools(
            java=Path("java"), kawa_jar=Path("kawa.jar"), kawa_launcher=Path("kawa")
        )

        assert tools.base_command()[0] == "java"

    def test_launcher_ignores_jvm_args(self):
        """Test the launcher command prefix."""
        tools = KawaTools(java=None, kawa_jar=None, kawa_launcher=Path("kawa"))

        assert tools.base_command(["-Xss4m"]) == ["kawa"]

    def test_nothing_usable(self):
        """Test error when no entry point is known."""
        tools = KawaTools(java=Path("java"), kawa_jar=None, kawa_launcher=None)

        with pytest.raises(ToolchainError):
            tools.base_command()


class TestKawaToolchain:
    """Test KawaToolchain lookup order."""

    def test_explicit_jar(self, tmp_path, no_path):
        """Test that an explicit jar path is used as is."""
        jar = tmp_path / "my-kawa.jar"
        jar.write_bytes(b"PK")

        assert KawaToolchain(kawa_jar=jar, env={}).find_kawa_jar() == jar

    def test_explicit_jar_missing(self, tmp_path, no_path):
        """Test error on a configured jar that does not exist."""
        toolchain = KawaToolchain(kawa_jar=tmp_path / "missing.jar", env={})

        with pytest.raises(ToolchainError, match="Kawa jar not found"):
            toolchain.find_kawa_jar()

    def test_kawa_jar_env(self, tmp_path, no_path):
        """Test KAWA_JAR environment variable."""
        jar = tmp_path / "kawa.jar"
        jar.write_bytes(b"PK")

        toolchain = KawaToolchain(env={"KAWA_JAR": str(jar)})

        assert toolchain.find_kawa_jar() == jar

    def test_kawa_jar_env_missing(self, tmp_path, no_path):
        """Test error when KAWA_JAR points nowhere."""
        toolchain = KawaToolchain(env={"KAWA_JAR": str(tmp_path / "gone.jar")})

        with pytest.raises(ToolchainError, match="KAWA_JAR"):
            toolchain.find_kawa_jar()

    def test_kawa_home_jar(self, kawa_home, no_path):
        """Test KAWA_HOME/lib/kawa.jar."""
        toolchain = KawaToolchain(env={"KAWA_HOME": str(kawa_home)})

        assert toolchain.find_kawa_jar() == kawa_home / "lib" / "kawa.jar"

    def test_kawa_home_versioned_jar(self, tmp_path, no_path):
        """Test the versioned jar name under KAWA_HOME."""
        lib = tmp_path / "lib"
        lib.mkdir()
        jar = lib / f"kawa-{KawaToolchain.VERSION}.jar"
        jar.write_bytes(b"PK")

        toolchain = KawaToolchain(env={"KAWA_HOME": str(tmp_path)})

        assert toolchain.find_kawa_jar() == jar

    def test_no_jar(self, no_path):
        """Test that no configuration means no jar."""
        assert KawaToolchain(env={}).find_kawa_jar() is None

    def test_java_home(self, java_home, no_path):
        """Test JAVA_HOME/bin/java."""
        toolchain = KawaToolchain(env={"JAVA_HOME": str(java_home)})

        assert toolchain.find_java() == java_home / "bin" / "java"
        no_path.assert_not_called()

    def test_java_on_path(self, tmp_path):
        """Test falling back to java on PATH."""
        with patch(
            "kawabuild.packages.toolchain.shutil.which", return_value="/usr/bin/java"
        ) as which:
            java = KawaToolchain(env={"PATH": "/usr/bin"}).find_java()

        assert java == Path("/usr/bin/java")
        which.assert_called_once_with("java", path="/usr/bin")

    def test_explicit_java_missing(self, tmp_path, no_path):
        """Test error on a configured java that does not exist."""
        toolchain = KawaToolchain(java=tmp_path / "nojava", env={})

        with pytest.raises(ToolchainError, match="java not found"):
            toolchain.find_java()

    def test_ensure_java_and_jar(self, kawa_home, java_home, no_path):
        """Test that java + jar resolve without looking for a launcher."""
        toolchain = KawaToolchain(
            env={"KAWA_HOME": str(kawa_home), "JAVA_HOME": str(java_home)}
        )

        tools = toolchain.ensure_toolchain()

        assert tools.java == java_home / "bin" / "java"
        assert tools.kawa_jar == kawa_home / "lib" / "kawa.jar"
        assert tools.kawa_launcher is None

    def test_ensure_falls_back_to_launcher(self, kawa_home, no_path):
        """Test that a missing java falls back to the kawa launcher."""
        toolchain = KawaToolchain(env={"KAWA_HOME": str(kawa_home)})

        tools = toolchain.ensure_toolchain()

        assert tools.java is None
        assert tools.kawa_launcher == kawa_home / "bin" / "kawa"
        assert tools.base_command() == [str(kawa_home / "bin" / "kawa")]

    def test_ensure_is_cached(self, kawa_home, java_home, no_path):
        """Test that the toolchain is resolved once."""
        toolchain = KawaToolchain(
            env={"KAWA_HOME": str(kawa_home), "JAVA_HOME": str(java_home)}
        )

        assert toolchain.ensure_toolchain() is toolchain.ensure_toolchain()

    def test_ensure_nothing_found(self, no_path):
        """Test error listing what is missing."""
        toolchain = KawaToolchain(env={})

        with pytest.raises(ToolchainError) as exc_info:
            toolchain.ensure_toolchain()

        message = str(exc_info.value)
        assert "Kawa toolchain not found" in message
        assert "Kawa jar" in message
        assert "java" in message

    def test_is_available(self, kawa_home, no_path):
        """Test is_available with and without a toolchain."""
        assert KawaToolchain(env={"KAWA_HOME": str(kawa_home)}).is_available() is True
        assert KawaToolchain(env={}).is_available() is False
