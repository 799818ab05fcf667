import io
import os
import shlex
import tempfile
import textwrap
import unittest
from contextlib import redirect_stderr, redirect_stdout

from inctest import cli
from inctest.errors import LoaderError
from inctest.loader import load_generator, load_suites
from inctest.registry import Registry
from tests import fakecompiler

SUITE_SOURCE = textwrap.dedent(
    """
    SUITES = [
        ("fixnums", [(1, "string", "1\\n"), (2, "string", "2\\n")]),
        ("lists", [([1, 2], "string", "(1 2)\\n")]),
    ]
    """
)

BROKEN_SUITE_SOURCE = textwrap.dedent(
    """
    SUITES = [
        ("fixnums", [(1, "string", "1\\n"), (2, "string", "3\\n")]),
    ]
    """
)


def _command_line(command):
    return " ".join(shlex.quote(part) for part in command)


class TestLoader(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.workdir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, source):
        path = os.path.join(self.workdir, name)
        with open(path, "w") as f:
            f.write(source)
        return path

    def test_load_generator_by_name(self):
        generator = load_generator("tests.fakecompiler:emit_program")
        self.assertIs(generator, fakecompiler.emit_program)

    def test_load_generator_rejects_bad_targets(self):
        for target in ("tests.fakecompiler", "tests.fakecompiler:nope", "no_such_mod_xyz:f",
                       "tests.fakecompiler:BUILD_COMMAND"):
            with self.subTest(target=target):
                with self.assertRaises(LoaderError):
                    load_generator(target)

    def test_load_suites_from_files_in_order(self):
        first = self._write("first_suite.py", SUITE_SOURCE)
        second = self._write("second_suite.py", 'SUITES = [("chars", [])]\n')

        registry = load_suites(Registry(), [first, second])

        self.assertEqual(
            [suite.name for suite in registry.freeze()], ["fixnums", "lists", "chars"]
        )

    def test_load_suites_requires_suites_list(self):
        path = self._write("empty_suite.py", "X = 1\n")
        with self.assertRaises(LoaderError):
            load_suites(Registry(), [path])

    def test_missing_suite_file(self):
        with self.assertRaises(LoaderError):
            load_suites(Registry(), [os.path.join(self.workdir, "missing.py")])


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.workdir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _suite(self, source):
        path = os.path.join(self.workdir, "cli_suite.py")
        with open(path, "w") as f:
            f.write(source)
        return path

    def _main(self, *extra):
        argv = [
            "--generator", "tests.fakecompiler:emit_program",
            "--workdir", self.workdir,
            "--build-command", _command_line(fakecompiler.BUILD_COMMAND),
            "--run-command", _command_line(fakecompiler.RUN_COMMAND),
        ] + list(extra)
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = cli.main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_passing_run_exits_zero(self):
        status, out, err = self._main(self._suite(SUITE_SOURCE))
        self.assertEqual(status, 0)
        self.assertTrue(out.endswith("Passed all 3 tests\n"))
        self.assertIn("Test 2: [1, 2] ... ok", out)

    def test_failing_run_prints_one_line_diagnostic(self):
        failure_dir = os.path.join(self.workdir, "failures")
        status, out, err = self._main(
            "--failure-dir", failure_dir, self._suite(BROKEN_SUITE_SOURCE)
        )

        self.assertEqual(status, 1)
        self.assertTrue(out.endswith("Test 1: 2 ...\n"))
        self.assertIn("Error: test 1 (2): output mismatch, expected '3\\n', got '2\\n'", err)
        self.assertNotIn("Traceback", err)

        kept = os.path.join(failure_dir, "test_1")
        self.assertEqual(
            sorted(os.listdir(kept)), ["info.txt", "stst", "stst.out", "stst.s"]
        )
        with open(os.path.join(kept, "info.txt")) as f:
            info = f.read()
        self.assertIn("error=OutputMismatchError", info)
        self.assertIn("actual='2\\n'", info)

    def test_inspect_prints_generated_program(self):
        status, out, err = self._main("--inspect", "hello")
        self.assertEqual(status, 0)
        self.assertEqual(out, "import sys\nsys.stdout.write('\"hello\"\\n')\n")

    def test_suites_are_required_without_inspect(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.parse_args(["--generator", "tests.fakecompiler:emit_program"])

    def test_bad_generator_is_reported(self):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = cli.main(["--generator", "tests.fakecompiler:nope", "--inspect", "1"])
        self.assertEqual(status, 1)
        self.assertEqual(out.getvalue(), "")
        self.assertIn("Error:", err.getvalue())


if __name__ == "__main__":
    unittest.main()
