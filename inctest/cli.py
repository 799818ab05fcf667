"""Command line entry point.

Usage:
    inctest --generator mycompiler.emit:emit_program tests/tests_1_1.py tests/tests_1_2.py
    inctest --generator mycompiler.emit:emit_program --inspect "(fx+ 1 2)"

Defaults can come from the environment so CI jobs do not have to repeat them:
INCTEST_WORKDIR, INCTEST_BUILD_COMMAND, INCTEST_RUN_COMMAND and
INCTEST_FAILURE_DIR.
"""

import argparse
import os
import shlex
import shutil
import sys
from pathlib import Path

from .errors import HarnessError
from .loader import load_generator, load_suites
from .pipeline import BUILD_COMMAND, RUN_COMMAND, Harness, HarnessConfig
from .registry import Registry
from .runner import ABORTED, Runner


def _copy_artifact(path, dest_dir):
    src = Path(path)
    if not src.exists():
        return
    try:
        shutil.copy2(src, dest_dir / src.name)
    except OSError as e:
        print(f"--- Could not keep {src}: {e} ---", file=sys.stderr)


def store_failure_artifacts(failure_dir, config, error):
    """Keep the fixed-path files of the failing case before they get overwritten."""
    case_name = "setup" if error.test_id is None else f"test_{error.test_id}"
    dest = Path(failure_dir) / case_name
    dest.mkdir(parents=True, exist_ok=True)

    info_lines = [
        f"error={type(error).__name__}",
        f"test_id={error.test_id}",
        f"expression={error.expression}",
    ]
    for attr in ("returncode", "expected", "actual"):
        if hasattr(error, attr):
            info_lines.append(f"{attr}={getattr(error, attr)!r}")
    (dest / "info.txt").write_text(
        "\n".join(info_lines) + "\n", encoding="utf-8", errors="ignore"
    )

    for candidate in (config.artifact_path, config.executable_path, config.capture_path):
        _copy_artifact(candidate, dest)
    return dest


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="inctest",
        description="Compile, build, run and check every registered test case.",
    )
    parser.add_argument(
        "--generator",
        required=True,
        help="Code generator as module:function, called as function(expression, sink)",
    )
    parser.add_argument(
        "--workdir",
        default=os.environ.get("INCTEST_WORKDIR", "."),
        help="Directory holding the artifact, executable and capture files (default: .)",
    )
    parser.add_argument(
        "--build-command",
        default=os.environ.get("INCTEST_BUILD_COMMAND", " ".join(BUILD_COMMAND)),
        help="Command that turns the artifact into the executable (default: make stst)",
    )
    parser.add_argument(
        "--run-command",
        default=os.environ.get("INCTEST_RUN_COMMAND", " ".join(RUN_COMMAND)),
        help="Command that runs the built executable (default: ./stst)",
    )
    parser.add_argument(
        "--failure-dir",
        default=os.environ.get("INCTEST_FAILURE_DIR"),
        help="Copy the failing case's files here before exiting",
    )
    parser.add_argument(
        "--inspect",
        metavar="EXPR",
        help="Print the generated program for EXPR instead of running suites",
    )
    parser.add_argument("suites", nargs="*", help="Suite modules or .py files")
    args = parser.parse_args(argv)
    if args.inspect is None and not args.suites:
        parser.error("at least one suite module is required")
    return args


def main(argv=None):
    args = parse_args(argv)
    config = HarnessConfig(
        workdir=args.workdir,
        build_command=tuple(shlex.split(args.build_command)),
        run_command=tuple(shlex.split(args.run_command)),
    )

    runner = None
    try:
        harness = Harness(generator=load_generator(args.generator), config=config)
        if args.inspect is not None:
            harness.inspect(args.inspect)
            return 0

        registry = load_suites(Registry(), args.suites)
        runner = Runner(harness, registry)
        runner.run()
    except HarnessError as e:
        if runner is not None and runner.state == ABORTED:
            # The progress line of the failing case has no newline yet.
            print(file=sys.stdout, flush=True)
        print(f"Error: {e}", file=sys.stderr)
        if args.failure_dir:
            dest = store_failure_artifacts(args.failure_dir, config, e)
            print(f"--- Failure artifacts kept in {dest} ---", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
