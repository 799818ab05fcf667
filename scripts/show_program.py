#!/usr/bin/env python3
"""
Print the program a code generator produces for one or more expressions,
without building or running anything.  Useful when a case fails and you want
to read the generated code next to the diagnostic.

Usage (from the project root):
    python scripts/show_program.py --generator mycompiler.emit:emit_program "(fx+ 1 2)"

Each expression is passed to the generator as a string.  With --out the
programs are written to <out>/<n>.s instead of stdout.
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inctest.loader import load_generator  # noqa: E402
from inctest.pipeline import Harness, HarnessConfig  # noqa: E402


def show(harness, expression):
    print(f"\n===== {expression} =====")
    harness.inspect(expression)


def write_to(harness, expression, asm_path: Path):
    asm_path.parent.mkdir(parents=True, exist_ok=True)
    with asm_path.open("w", encoding="utf-8") as asm_file:
        harness.sink.with_scoped_sink(
            asm_file, lambda: harness.generator(expression, harness.sink)
        )
    print(f"[{expression}] -> {asm_path}")


def main():
    parser = argparse.ArgumentParser(description="Show generated programs")
    parser.add_argument("--generator", required=True, help="module:function")
    parser.add_argument("--out", type=Path, help="Write programs under this directory")
    parser.add_argument("expressions", nargs="+")
    args = parser.parse_args()

    harness = Harness(generator=load_generator(args.generator), config=HarnessConfig())
    for index, expression in enumerate(args.expressions):
        if args.out is None:
            show(harness, expression)
        else:
            write_to(harness, expression, args.out / f"{index}.s")


if __name__ == "__main__":
    main()
