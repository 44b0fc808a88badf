"""Error handling for toyscript. Only ToyScriptErrors should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every stage raises from its own branch of the hierarchy:
    - ScanError: raised by the scanner
    - ParseError: raised by both the validator and the evaluator (they walk the same grammar)
    - EvaluationError: raised by the evaluator only
"""

import sys

from termcolor import colored


class ToyScriptError(Exception):
    """Base class of all toyscript errors. str(error) is the message reported to the user."""
    stage = "Error"

    def __init__(self, msg, token=None):
        self.token = token  # offending TokenInfo, if there is one
        self.msg = msg
        super().__init__(f"{self.stage}: {msg}")

    @property
    def line(self):
        return self.token.line if self.token is not None else None


class SourceError(ToyScriptError):
    stage = "File error"

    def __init__(self, path):
        self.path = path
        super().__init__(f"'{path}' could not be opened")


# scanner errors

class ScanError(ToyScriptError):
    stage = "Tokenizer error"


class NotAKeyword(ScanError):
    """Reserved: the scanner never raises it."""

    def __init__(self, token):
        super().__init__(f"not a keyword {token}", token)


class InvalidPattern(ScanError):

    def __init__(self, lexeme, position):
        self.lexeme = lexeme
        self.position = position
        super().__init__(f"invalid pattern {lexeme} on line {position.row}")

    @property
    def line(self):
        return self.position.row


class InvalidStream(ScanError):

    def __init__(self):
        super().__init__("invalid stream. Cannot read")


# syntax errors, shared by validator and evaluator

class ParseError(ToyScriptError):
    stage = "Syntax error"


class UnexpectedToken(ParseError):

    def __init__(self, token, context):
        self.context = context
        super().__init__(f"unexpected token '{token.lexeme}' of type {token.kind} after {context} on line "
                         f"{token.line}", token)


class InvalidFor(ParseError):

    def __init__(self, token):
        super().__init__(f"invalid for loop structure, unexpected token '{token.lexeme}' of type {token.kind} on "
                         f"line {token.line}", token)


class InvalidAssignment(ParseError):

    def __init__(self, token, context):
        self.context = context
        super().__init__(f"invalid assignment; found '{token.lexeme}' of type {token.kind} after {context} on line "
                         f"{token.line}", token)


class MissingClosingParenthesis(ParseError):

    def __init__(self, token):
        super().__init__(f"missing closing parentheses on line {token.line}", token)


class MissingClosingBrace(ParseError):

    def __init__(self, token):
        super().__init__(f"missing closing braces on line {token.line}", token)


class ExpectedOpeningBrace(ParseError):

    def __init__(self, token):
        super().__init__(f"expected {{, found '{token.lexeme}' on line {token.line}", token)


class ExpectedOpeningParenthesis(ParseError):

    def __init__(self, token):
        super().__init__(f"expected (, found '{token.lexeme}' on line {token.line}", token)


class MissingSemicolon(ParseError):

    def __init__(self, token):
        super().__init__(f"missing semicolon ';' on line {token.line}", token)


# evaluation errors

class EvaluationError(ToyScriptError):
    stage = "Evaluation error"


class UndefinedVariable(EvaluationError):

    def __init__(self, token):
        super().__init__(f"variable '{token.lexeme}' on line {token.line} undefined", token)


class DivisionByZero(EvaluationError):

    def __init__(self, token):
        super().__init__(f"division by zero on line {token.line}", token)


class InvalidLiteral(EvaluationError):

    def __init__(self, token):
        super().__init__(f"'{token.lexeme}' is not a valid 64-bit integer on line {token.line}", token)


class ErrorHandler:
    """Context manager that reports toyscript errors raised while running a file and suppresses them, so that the
    next file can still be run. Unknown Python errors are reported as internal and re-raised.
    """
    ERROR = "red"

    def __init__(self, color=None, out=None):
        self.out = out if out is not None else sys.stdout
        self.color = color if color is not None else self.out.isatty()
        self.path = None
        self.errors = []  # (path, error) for every error thrown

    def register_file(self, path):
        """Registers path as the origin of any error raised until the next call."""
        self.path = path

    def _colored(self, text, color=None):
        if not self.color:
            return text
        return colored(text, color, attrs=["bold"])

    def format(self, error):
        """Returns the report line for error."""
        return f"{self._colored(str(error), ErrorHandler.ERROR)} in file {self._colored(self.path)}"

    def throw(self, error):
        """Prints error against the registered file."""
        self.errors.append((self.path, error))
        print(self.format(error), file=self.out)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False

        if issubclass(exc_type, ToyScriptError):
            self.throw(exc_val)
        elif issubclass(exc_type, RecursionError):
            self.throw(ToyScriptError("maximum nesting depth exceeded"))
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(ToyScriptError("keyboard interrupt"))
        else:
            self.throw(ToyScriptError(f"[internal] unknown error: '{exc_type.__name__}: {exc_val}'"))
            return False

        return True
