"""Fuzzer configuration with builder-style helpers and validation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta


class ConfigError(ValueError):
    """Raised when a configuration is not usable."""


@dataclass(frozen=True)
class FuzzerConfig:
    rpc_url: str
    package_id: str
    module_name: str
    function_name: str
    type_arguments: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    iterations: int = 1_000_000
    timeout_seconds: int = 300
    sender: str | None = None

    def with_type_arguments(self, type_arguments: list[str]) -> FuzzerConfig:
        return replace(self, type_arguments=list(type_arguments))

    def with_args(self, args: list[str]) -> FuzzerConfig:
        return replace(self, args=list(args))

    def with_iterations(self, iterations: int) -> FuzzerConfig:
        return replace(self, iterations=iterations)

    def with_timeout_seconds(self, timeout_seconds: int) -> FuzzerConfig:
        return replace(self, timeout_seconds=timeout_seconds)

    def with_sender(self, sender: str) -> FuzzerConfig:
        return replace(self, sender=sender)

    def timeout_duration(self) -> timedelta:
        return timedelta(seconds=self.timeout_seconds)

    def validate(self) -> None:
        """Raise ConfigError if a required field is empty or a limit is zero."""
        if not self.rpc_url:
            raise ConfigError("RPC URL cannot be empty")
        if not self.package_id:
            raise ConfigError("Package ID cannot be empty")
        if not self.module_name:
            raise ConfigError("Module name cannot be empty")
        if not self.function_name:
            raise ConfigError("Function name cannot be empty")
        if self.iterations == 0:
            raise ConfigError("Iterations must be greater than 0")
        if self.timeout_seconds == 0:
            raise ConfigError("Timeout must be greater than 0")