"""Session control for toyscript. A Session runs source files one after another through the scanner, the validator
and the evaluator, reporting the first error of each file and carrying one Environment across all of them.
"""

import logging

from toyscript.lang.environment import Environment
from toyscript.lang.error import SourceError
from toyscript.lang.evaluator import evaluate
from toyscript.lang.scanner import scan, tokenize
from toyscript.lang.validator import validate

logger = logging.getLogger(__name__)


class Session:
    """Governs a toyscript run, with ownership of its Environment."""

    def __init__(self, error_handler, environment=None, out=None):
        self.error_handler = error_handler
        self.environment = environment if environment is not None else Environment.seeded()
        self.out = out  # where CONSOLE prints (stdout if None)

        self.results = {}  # dict of path: evaluation result for every file that ran without error

    def execute(self, tokens):
        """Validates tokens and, if they are well-formed, evaluates them. Returns the evaluation result."""
        logger.debug("validating %d tokens", len(tokens))
        validate(tokens)
        logger.debug("evaluating")
        return evaluate(tokens, self.environment, self.out)

    def run_source(self, source, name="<string>"):
        """Runs source (str or bytes) under name. Returns the result, or None if an error was reported."""
        self.error_handler.register_file(name)
        with self.error_handler:
            self.results[name] = self.execute(scan(source))
            return self.results[name]
        return None

    def run_file(self, path):
        """Runs the file at path. Returns the result, or None if an error was reported."""
        logger.info("running %s", path)
        self.error_handler.register_file(path)

        with self.error_handler:
            try:
                stream = open(path, "rb")
            except OSError:
                raise SourceError(path)

            with stream:
                tokens = tokenize(stream)

            self.results[path] = self.execute(tokens)
            return self.results[path]

        return None

    def run(self, paths):
        """Runs every file in paths, in order. Returns the number of files that reported an error."""
        failures = 0
        for path in paths:
            if self.run_file(path) is None:
                failures += 1
        return failures
