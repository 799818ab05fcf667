"""Sequential runner and reporter.

Suites run in registration order and cases within a suite in the order they
were given. A single counter numbers cases across all suites. The first
failure of any kind ends the run: errors are never caught here.
"""

import sys

from .errors import InvalidTestKindError
from .registry import STRING_OUTPUT, Registry

IDLE = "idle"
REGISTERING = "registering"
RUNNING = "running"
COMPLETED = "completed"
ABORTED = "aborted"


def _string_output(harness, test_id, case):
    harness.test_with_string_output(test_id, case.expression, case.expected)


PIPELINES = {
    STRING_OUTPUT: _string_output,
}


def test_one(harness, test_id, case, out=None):
    """Run a single case through the pipeline selected by its output kind."""
    out = out or sys.stdout
    print(f"Test {test_id}: {case.expression} ...", end="", file=out, flush=True)
    pipeline = PIPELINES.get(case.output_kind)
    if pipeline is None:
        raise InvalidTestKindError(test_id, case.expression, case.output_kind)
    pipeline(harness, test_id, case)
    print(" ok", file=out, flush=True)


test_one.__test__ = False


def print_timing_summary(timings, stream):
    if not timings:
        return

    total_time = sum(entry.duration for entry in timings)
    builds = [entry for entry in timings if entry.stage == "builder"]
    build_time = sum(entry.duration for entry in builds)

    print("--- Stage timing summary ---", file=stream)
    print(f"Total invocations: {len(timings)} in {total_time:.2f}s", file=stream)
    print(f"Builder invocations: {len(builds)} taking {build_time:.2f}s", file=stream)
    print("Slowest commands:", file=stream)
    for entry in sorted(timings, key=lambda item: item.duration, reverse=True)[:5]:
        print(
            f"  {entry.duration:.2f}s | rc={entry.returncode} | {' '.join(entry.command)}",
            file=stream,
        )


class Runner:
    """Owns the registry for one harness and tracks the run phase."""

    def __init__(self, harness, registry=None, out=None):
        self.harness = harness
        self.registry = registry if registry is not None else Registry()
        self.out = out
        if self.registry.frozen or not len(self.registry):
            self.state = IDLE
        else:
            self.state = REGISTERING
        self.passed = 0

    def register_suite(self, name, cases):
        suite = self.registry.register_suite(name, cases)
        self.state = REGISTERING
        return suite

    def run(self):
        out = self.out or sys.stdout
        suites = self.registry.freeze()
        self.state = RUNNING
        try:
            test_id = 0
            for suite in suites:
                print(f"Performing {suite.name} tests ...", file=out, flush=True)
                for case in suite.cases:
                    test_one(self.harness, test_id, case, out=out)
                    test_id += 1
                    self.passed = test_id
        except BaseException:
            self.state = ABORTED
            raise
        self.state = COMPLETED
        print(f"Passed all {test_id} tests", file=out, flush=True)
        print_timing_summary(self.harness.timings, self.harness.log or sys.stderr)
        return test_id


def test_all(harness, registry, out=None):
    """Run every registered case; returns the number of cases that passed."""
    return Runner(harness, registry, out=out).run()


test_all.__test__ = False
