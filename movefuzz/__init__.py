"""Fuzzing driver, object cache, reporting, Move payload types and edge coverage."""

__version__ = "0.1.0"

__all__ = [
    "cache",
    "config",
    "coverage",
    "fuzzer",
    "input",
    "reporter",
    "types",
]