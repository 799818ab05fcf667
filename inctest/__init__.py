"""End-to-end output tests for an incremental compiler."""

from .errors import (
    BuildError,
    ExecutionError,
    HarnessError,
    InvalidSinkError,
    InvalidTestKindError,
    LoaderError,
    OutputMismatchError,
    RegistryFrozenError,
)
from .pipeline import Harness, HarnessConfig, compare
from .printer import Char, Pair, Symbol, Vector, expect, write_value
from .registry import STRING_OUTPUT, FrozenRegistry, Registry, TestCase, TestSuite
from .runner import Runner, test_all, test_one
from .sink import Sink

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "Char",
    "ExecutionError",
    "FrozenRegistry",
    "Harness",
    "HarnessConfig",
    "HarnessError",
    "InvalidSinkError",
    "InvalidTestKindError",
    "LoaderError",
    "OutputMismatchError",
    "Pair",
    "Registry",
    "RegistryFrozenError",
    "Runner",
    "STRING_OUTPUT",
    "Sink",
    "Symbol",
    "TestCase",
    "TestSuite",
    "Vector",
    "compare",
    "expect",
    "test_all",
    "test_one",
    "write_value",
]
