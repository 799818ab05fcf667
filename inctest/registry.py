"""Test registration.

Suites are registered during setup and frozen when the run starts::

    registry = Registry()
    registry.register_suite("fixnums", [
        ("42", "string", "42\\n"),
        ("(fx+ 1 2)", "string", "3\\n"),
    ])
"""

from dataclasses import dataclass
from typing import Any, Tuple

from .errors import RegistryFrozenError

STRING_OUTPUT = "string"


@dataclass(frozen=True)
class TestCase:
    expression: Any
    output_kind: str
    expected: str

    __test__ = False


@dataclass(frozen=True)
class TestSuite:
    name: str
    cases: Tuple[TestCase, ...]

    __test__ = False


class FrozenRegistry:
    """Read-only view of the registered suites, in registration order."""

    def __init__(self, suites):
        self._suites = tuple(suites)

    @property
    def suites(self):
        return self._suites

    def __iter__(self):
        return iter(self._suites)

    def __len__(self):
        return len(self._suites)

    def total(self):
        return sum(len(suite.cases) for suite in self._suites)

    @property
    def frozen(self):
        return True

    def freeze(self):
        return self


class Registry:
    def __init__(self):
        self._suites = []
        self._frozen = None

    def __len__(self):
        return len(self._suites)

    @property
    def frozen(self):
        return self._frozen is not None

    def register_suite(self, name, cases):
        """Append a suite; ``cases`` is a sequence of (expr, kind, expected).

        The kind is not validated here, an unknown kind only fails when the
        case is run.
        """
        if self._frozen is not None:
            raise RegistryFrozenError(name)
        suite = TestSuite(
            name=name,
            cases=tuple(
                TestCase(expression=expr, output_kind=kind, expected=expected)
                for expr, kind, expected in cases
            ),
        )
        self._suites.append(suite)
        return suite

    def extend(self, pairs):
        for name, cases in pairs:
            self.register_suite(name, cases)

    def freeze(self):
        if self._frozen is None:
            self._frozen = FrozenRegistry(self._suites)
        return self._frozen
