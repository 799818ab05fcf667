"""Errors raised by the harness.

Every error is fatal for a run: nothing in the harness catches them, so the
first one unwinds straight out of ``test_all``. ``str(error)`` is the single
diagnostic line shown to the user.
"""


class HarnessError(Exception):
    """Base class for everything the harness raises on purpose."""

    def __init__(self, message, test_id=None, expression=None):
        super().__init__(message)
        self.test_id = test_id
        self.expression = expression

    def _prefix(self):
        if self.test_id is None:
            return ""
        return f"test {self.test_id} ({self.expression}): "

    def __str__(self):
        return self._prefix() + super().__str__()


class _ProcessError(HarnessError):
    stage = "process"

    def __init__(self, returncode, command, test_id=None, expression=None):
        self.returncode = returncode
        self.command = list(command)
        super().__init__(
            f"{self.stage} `{' '.join(self.command)}` exited with status {returncode}",
            test_id=test_id,
            expression=expression,
        )


class BuildError(_ProcessError):
    stage = "builder"


class ExecutionError(_ProcessError):
    stage = "executable"


class OutputMismatchError(HarnessError):
    def __init__(self, test_id, expression, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"output mismatch, expected {expected!r}, got {actual!r}",
            test_id=test_id,
            expression=expression,
        )


class InvalidTestKindError(HarnessError):
    def __init__(self, test_id, expression, kind):
        self.kind = kind
        super().__init__(
            f"invalid test kind {kind!r}", test_id=test_id, expression=expression
        )


class InvalidSinkError(HarnessError):
    def __init__(self, target, reason):
        self.target = target
        super().__init__(f"cannot write generated code to {target!r}: {reason}")


class RegistryFrozenError(HarnessError):
    def __init__(self, name):
        self.suite_name = name
        super().__init__(
            f"cannot register suite {name!r}: the registry is frozen once a run starts"
        )


class LoaderError(HarnessError):
    pass
