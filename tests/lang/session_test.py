import io
import os
import shutil
import tempfile
import unittest

from toyscript.lang.environment import Environment
from toyscript.lang.error import ErrorHandler, ToyScriptError
from toyscript.lang.session import Session


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.mkdtemp()
        self.out = io.StringIO()
        self.session = Session(ErrorHandler(color=False, out=self.out), out=self.out)

    def tearDown(self):
        shutil.rmtree(self.dir)

    def write(self, name, source):
        path = os.path.join(self.dir, name)
        with open(path, "w") as file:
            file.write(source)
        return path

    def test_seeded_environment(self):
        self.assertEqual({"x": 1, "y": 3}, self.session.environment)
        self.assertEqual({"x": 1, "y": 3, "z": 7}, Environment.seeded({"z": 7}))
        self.assertEqual({"x": 9, "y": 3}, Environment.seeded({"x": 9}))

    def test_run_file(self):
        path = self.write("a.ts", "x:=5;\nCONSOLE x;\n")
        self.assertEqual(10, self.session.run_file(path))
        self.assertEqual("5\n", self.out.getvalue())
        self.assertEqual({path: 10}, self.session.results)

    def test_environment_shared_across_files(self):
        first = self.write("first.ts", "a := x + y;")
        second = self.write("second.ts", "CONSOLE a * 2;")
        self.assertEqual(0, self.session.run([first, second]))
        self.assertEqual("8\n", self.out.getvalue())

    def test_error_reported_and_next_file_runs(self):
        broken = self.write("broken.ts", "a := 1;\nCONSOLE a;\nCONSOLE b;\n")
        fine = self.write("fine.ts", "CONSOLE a + 1;")

        self.assertEqual(1, self.session.run([broken, fine]))
        self.assertEqual(["1", f"Evaluation error: variable 'b' on line 3 undefined in file {broken}", "2"],
                         self.out.getvalue().splitlines())
        self.assertIsNone(self.session.results.get(broken))

    def test_each_stage_reports(self):
        cases = {
            "scan.ts": ("1 @ 2;", "Tokenizer error: invalid pattern @ on line 1"),
            "syntax.ts": ("1+1", "Syntax error: missing semicolon ';' on line 1"),
            "eval.ts": ("1 / 0;", "Evaluation error: division by zero on line 1"),
        }
        for name, (source, msg) in cases.items():
            path = self.write(name, source)
            self.assertIsNone(self.session.run_file(path), name)
            self.assertEqual(f"{msg} in file {path}", self.out.getvalue().splitlines()[-1], name)

    def test_syntax_error_prevents_side_effects(self):
        path = self.write("half.ts", "CONSOLE 1;\nq := 2;\n(3;\n")
        self.assertIsNone(self.session.run_file(path))
        self.assertEqual([f"Syntax error: missing closing parentheses on line 3 in file {path}"],
                         self.out.getvalue().splitlines())
        self.assertNotIn("q", self.session.environment)

    def test_missing_file(self):
        path = os.path.join(self.dir, "nope.ts")
        self.assertIsNone(self.session.run_file(path))
        self.assertEqual(f"File error: '{path}' could not be opened in file {path}", self.out.getvalue().strip())

    def test_run_source(self):
        self.assertEqual(3, self.session.run_source("1 + 2;"))
        self.assertIsNone(self.session.run_source("1 +", name="<in>"))
        self.assertTrue(self.out.getvalue().rstrip().endswith("in file <in>"))

        self.assertEqual(7, self.session.run_source(b"q := 7;", name="<bytes>"))
        self.assertEqual({"<string>": 3, "<bytes>": 7}, self.session.results)
        self.assertEqual(7, self.session.environment["q"])

    def test_deep_nesting(self):
        self.assertIsNone(self.session.run_source("(" * 5000 + "1" + ")" * 5000 + ";"))
        self.assertIn("maximum nesting depth exceeded", self.out.getvalue())


class ErrorHandlerTestCase(unittest.TestCase):

    def test_suppresses_toyscript_errors(self):
        out = io.StringIO()
        handler = ErrorHandler(color=False, out=out)
        handler.register_file("f.ts")
        with handler:
            raise ToyScriptError("boom")

        self.assertEqual("Error: boom in file f.ts\n", out.getvalue())
        self.assertEqual(1, len(handler.errors))

    def test_internal_errors_propagate(self):
        handler = ErrorHandler(color=False, out=io.StringIO())
        with self.assertRaises(KeyError):
            with handler:
                raise KeyError("x")
        self.assertIn("[internal]", str(handler.errors[0][1]))

    def test_color(self):
        handler = ErrorHandler(color=True, out=io.StringIO())
        handler.register_file("f.ts")
        report = handler.format(ToyScriptError("boom"))
        self.assertIn("Error: boom", report)
        self.assertIn("f.ts", report)


if __name__ == '__main__':
    unittest.main()
