"""Thin wrappers over native package-manager CLIs."""

from dataclasses import dataclass

from ..shell import CommandResult


@dataclass(frozen=True)
class PackageResult:
    success: bool
    output: str = ""

    @classmethod
    def from_command(cls, result: CommandResult) -> "PackageResult":
        return cls(result.ok, result.output)

    @classmethod
    def unavailable(cls, what: str) -> "PackageResult":
        return cls(False, f"{what} is not available")
