"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/kawabuild/kawabuild"
KEYWORDS = "kawa scheme jvm compiler build-tool source-set"
HERE = os.path.dirname(os.path.abspath(__file__))


def get_version() -> str:
    """Read the version from the package without importing it."""
    with open(os.path.join(HERE, "src", "kawabuild", "__init__.py"), encoding="utf-8") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"')
    raise RuntimeError("Unable to find __version__")


if __name__ == "__main__":
    setup(
        name="kawabuild",
        version=get_version(),
        description="Compile Kawa Scheme sources into JVM class files",
        keywords=KEYWORDS,
        url=URL,
        license="Apache-2.0",
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=[],
        extras_require={"test": ["pytest>=7.0"]},
        entry_points={"console_scripts": ["kawabuild = kawabuild.cli:main"]},
        include_package_data=True)
