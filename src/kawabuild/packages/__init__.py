"""Toolchain location for kawabuild."""

from .toolchain import KawaToolchain, KawaTools, ToolchainError

__all__ = [
    "KawaToolchain",
    "KawaTools",
    "ToolchainError",
]
