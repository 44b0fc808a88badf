import argparse
import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from toyscript.main import build_parser, define, main


class DefineTestCase(unittest.TestCase):

    def test_define(self):
        should_fail = ["x", "=3", "x=", "x=abc", "x_1=2", "x=#"]
        for case in should_fail:
            self.assertRaises(argparse.ArgumentTypeError, define, case)

        should_pass = {"z=7": ("z", 7), "z = -2": ("z", -2), "h=#ff": ("h", 255), "n=-#10": ("n", -16)}
        for case, result in should_pass.items():
            self.assertEqual(result, define(case), case)

    def test_parser(self):
        args = build_parser().parse_args(["a.ts", "b.ts", "-D", "z=1", "-vv", "--color", "never"])
        self.assertEqual(["a.ts", "b.ts"], args.files)
        self.assertEqual([("z", 1)], args.define)
        self.assertEqual(2, args.verbose)
        self.assertEqual("never", args.color)


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.dir)

    def write(self, name, source):
        path = os.path.join(self.dir, name)
        with open(path, "w") as file:
            file.write(source)
        return path

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(["--color", "never", *argv])
        return status, out.getvalue().splitlines()

    def test_for_loop(self):
        path = self.write("loop.ts", "for (i:=1 to 3) begin CONSOLE i; end;\nCONSOLE i;\n")
        self.assertEqual((0, ["1", "2", "3", "3"]), self.run_main(path))

        path = self.write("last.ts", "for (i:=1 to 3) begin CONSOLE i; end")
        self.assertEqual((0, ["1", "2", "3"]), self.run_main(path))

    def test_seeds_and_defines(self):
        path = self.write("seed.ts", "CONSOLE x; CONSOLE y; CONSOLE z;")
        self.assertEqual((0, ["1", "3", "10"]), self.run_main("-D", "z=10", path))

    def test_errors_do_not_stop_the_run(self):
        bad = self.write("bad.ts", "1+1")
        good = self.write("good.ts", "CONSOLE #FF + 1;")
        missing = os.path.join(self.dir, "missing.ts")

        status, lines = self.run_main(bad, missing, good)
        self.assertEqual(0, status)
        self.assertEqual([f"Syntax error: missing semicolon ';' on line 1 in file {bad}",
                          f"File error: '{missing}' could not be opened in file {missing}",
                          "256"], lines)

    def test_requires_a_file(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            main([])


if __name__ == '__main__':
    unittest.main()
