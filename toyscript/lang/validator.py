"""Syntax validation for toyscript. A Validator walks the grammar once without computing anything, so that a file is
known to be well-formed before the evaluator produces any side effect.
"""

from toyscript.lang.grammar import Cursor, Grammar


class Validator(Grammar):
    """Pure recognizer: every rule returns None. Loop bodies are walked exactly once."""

    def literal(self, token):
        return None

    def assign(self, name, value):
        return None

    def lookup(self, name):
        return None

    def binary(self, operator, left, right):
        return None

    def unary_op(self, operator, operand):
        return None

    def console(self, value):
        return None

    def for_body(self, control, start, end):
        self.for_pass()

    def while_body(self, condition_index, condition):
        self.block_body()


def validate(tokens):
    """Raises the first ParseError in tokens, if any."""
    Validator(Cursor(tokens)).statements()
