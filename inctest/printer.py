"""Render Python data the way the compiled runtime prints Scheme values.

Handy for writing expected outputs from data instead of by hand::

    expect(42, True, Char("a"), [1, 2, 3])  ->  "42\\n#t\\n#\\\\a\\n(1 2 3)\\n"
"""

from collections import namedtuple

CHAR_NAMES = {
    "\t": "tab",
    "\n": "newline",
    "\r": "return",
    " ": "space",
}


class Char(str):
    def __new__(cls, value):
        if len(value) != 1:
            raise ValueError(f"Char expects a single character, got {value!r}")
        return super().__new__(cls, value)


class Symbol(str):
    pass


class Vector(list):
    pass


Pair = namedtuple("Pair", ["car", "cdr"])


def _write_list_tail(parts, cdr):
    while True:
        if cdr is None:
            return
        if isinstance(cdr, Pair):
            parts.append(" " + write_value(cdr.car))
            cdr = cdr.cdr
        elif isinstance(cdr, (list, tuple)) and not isinstance(cdr, Vector):
            parts.extend(" " + write_value(item) for item in cdr)
            return
        else:
            parts.append(" . " + write_value(cdr))
            return


def write_value(value):
    # bool first: True is also an int.
    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Char):
        return "#\\" + CHAR_NAMES.get(str(value), str(value))
    if isinstance(value, Symbol):
        return "'" + str(value)
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "()"
    if isinstance(value, Vector):
        return "[" + " ".join(write_value(item) for item in value) + "]"
    if isinstance(value, Pair):
        parts = ["(" + write_value(value.car)]
        _write_list_tail(parts, value.cdr)
        return "".join(parts) + ")"
    if isinstance(value, (list, tuple)):
        return "(" + " ".join(write_value(item) for item in value) + ")"
    raise TypeError(f"cannot print value of type {type(value).__name__}")


def expect(*values):
    """Expected output for a program printing each value on its own line."""
    return "".join(write_value(value) + "\n" for value in values)
