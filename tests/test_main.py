import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from main import main, parse_args
from runner import GENERATOR_NAMES, LINE_SIZES, ITERATIONS


class TestCommandLine(unittest.TestCase):
    def test_defaults(self):
        args = parse_args([])
        self.assertEqual(args.generators, GENERATOR_NAMES)
        self.assertEqual(args.line_sizes, LINE_SIZES)
        self.assertEqual(args.iterations, ITERATIONS)
        self.assertEqual(args.protocol, "A")
        self.assertEqual(args.policy, "random")

    def test_small_sweep_with_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.csv")
            out = io.StringIO()
            with redirect_stdout(out):
                code = main(["--iterations", "500", "--generators", "memGen4", "--line-sizes", "32", "64",
                             "--csv", path])
            self.assertEqual(code, 0)
            with open(path) as f:
                self.assertEqual(len(f.read().splitlines()), 3)
        text = out.getvalue()
        self.assertIn("Two-Level Cache Performance Simulator", text)
        self.assertIn("CPI Results:", text)

    def test_rejects_non_positive_iterations(self):
        err = io.StringIO()
        with redirect_stderr(err):
            self.assertEqual(main(["--iterations", "0"]), 2)

    def test_unknown_generator_exits(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args(["--generators", "memGen7"])

    def test_crosscheck_flag(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["--iterations", "300", "--generators", "memGen2", "--line-sizes", "16", "--crosscheck"])
        self.assertEqual(code, 0)
        self.assertIn("Cross-check against pycachesim", out.getvalue())

    def test_crosscheck_skips_bad_line_size(self):
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            code = main(["--iterations", "300", "--generators", "memGen4", "--line-sizes", "16", "24",
                         "--crosscheck"])
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn("skipped: L1: line size 24 is not a power of two", text)
        self.assertIn("CPI Results:", text)
        self.assertIn("memGen4,16,", text)


if __name__ == "__main__":
    unittest.main()
