"""Swappable destination for generated code.

The code generator only ever writes through ``Sink.emit``; whether the text
ends up in the artifact file or on the terminal depends on what the harness
has bound with ``Sink.scoped``.
"""

import sys
from contextlib import contextmanager

from .errors import InvalidSinkError


def _check_writable(target):
    if not callable(getattr(target, "write", None)):
        raise InvalidSinkError(target, "object has no write() method")
    if getattr(target, "closed", False):
        raise InvalidSinkError(target, "stream is closed")
    writable = getattr(target, "writable", None)
    if callable(writable) and not writable():
        raise InvalidSinkError(target, "stream is not open for writing")


class Sink:
    def __init__(self, default=None):
        if default is not None:
            _check_writable(default)
        self._default = default
        self._stack = []

    @property
    def current(self):
        if self._stack:
            return self._stack[-1]
        # Resolved at write time so redirected stdout is honoured.
        return self._default if self._default is not None else sys.stdout

    @contextmanager
    def scoped(self, target):
        """Bind ``target`` for the extent of the ``with`` block."""
        _check_writable(target)
        self._stack.append(target)
        try:
            yield target
        finally:
            self._stack.pop()

    def with_scoped_sink(self, target, func):
        with self.scoped(target):
            return func()

    def emit(self, template, *args):
        text = template.format(*args) if args else str(template)
        out = self.current
        out.write(text)
        out.write("\n")
