"""The compile -> build -> execute -> compare pipeline.

Each stage works on fixed, working-directory relative paths. Every case
overwrites the artifacts of the previous one, so two harness runs must never
share a working directory.
"""

import os
import subprocess
import sys
import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import BuildError, ExecutionError, OutputMismatchError
from .sink import Sink

ARTIFACT_FILE = "stst.s"
EXECUTABLE_FILE = "stst"
CAPTURE_FILE = "stst.out"
BUILD_COMMAND = ("make", "stst")
RUN_COMMAND = ("./stst",)

# Exit statuses reported when a command cannot be started, as a shell would.
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


@dataclass(frozen=True)
class HarnessConfig:
    workdir: str = "."
    artifact_file: str = ARTIFACT_FILE
    executable_file: str = EXECUTABLE_FILE
    capture_file: str = CAPTURE_FILE
    build_command: Tuple[str, ...] = BUILD_COMMAND
    run_command: Tuple[str, ...] = RUN_COMMAND

    def path(self, name):
        return os.path.join(self.workdir, name)

    @property
    def artifact_path(self):
        return self.path(self.artifact_file)

    @property
    def executable_path(self):
        return self.path(self.executable_file)

    @property
    def capture_path(self):
        return self.path(self.capture_file)


@dataclass
class StageTiming:
    stage: str
    command: Tuple[str, ...]
    duration: float
    returncode: int


def compare(test_id, expression, expected, actual):
    if expected != actual:
        raise OutputMismatchError(test_id, expression, expected, actual)


@dataclass
class Harness:
    """Drives one code generator through the pipeline.

    ``generator`` is called as ``generator(expression, sink)`` and must write
    the whole program through ``sink.emit``.
    """

    generator: object
    config: HarnessConfig = field(default_factory=HarnessConfig)
    sink: Sink = field(default_factory=Sink)
    timings: list = field(default_factory=list)
    log: Optional[object] = None

    def _log(self, message):
        print(message, file=self.log or sys.stderr, flush=True)

    def _run(self, stage, command, **kwargs):
        command = tuple(command)
        self._log(f"--- Running {stage}: {' '.join(command)} ---")
        start = time.perf_counter()
        try:
            result = subprocess.run(command, cwd=self.config.workdir, **kwargs)
            returncode = result.returncode
        except FileNotFoundError:
            returncode = COMMAND_NOT_FOUND
        except OSError as e:
            self._log(f"--- Could not start {stage}: {e} ---")
            returncode = COMMAND_NOT_EXECUTABLE
        self.timings.append(
            StageTiming(
                stage=stage,
                command=command,
                duration=time.perf_counter() - start,
                returncode=returncode,
            )
        )
        if returncode != 0:
            self._log(f"--- {stage.capitalize()} failed (exit {returncode}) ---")
        return returncode

    def compile_program(self, expression):
        """Write the generated program for ``expression`` to the artifact file."""
        with open(self.config.artifact_path, "w", encoding="utf-8") as artifact:
            with self.sink.scoped(artifact):
                self.generator(expression, self.sink)

    def inspect(self, expression):
        """Emit the program for ``expression`` to the unscoped sink (stdout)."""
        self.generator(expression, self.sink)

    def build(self, test_id=None, expression=None):
        command = self.config.build_command
        returncode = self._run("builder", command)
        if returncode != 0:
            raise BuildError(returncode, command, test_id, expression)

    def execute(self, test_id=None, expression=None):
        command = self.config.run_command
        with open(self.config.capture_path, "wb") as capture:
            returncode = self._run("executable", command, stdout=capture)
        if returncode != 0:
            raise ExecutionError(returncode, command, test_id, expression)

    def read_captured(self):
        with open(self.config.capture_path, "rb") as capture:
            return capture.read().decode("utf-8", errors="surrogateescape")

    def test_with_string_output(self, test_id, expression, expected):
        self.compile_program(expression)
        self.build(test_id, expression)
        self.execute(test_id, expression)
        compare(test_id, expression, expected, self.read_captured())
