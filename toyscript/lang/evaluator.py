"""Evaluation of toyscript. An Evaluator walks the same grammar as the Validator, but every rule returns a signed 64-bit
int, assignments mutate an Environment and CONSOLE statements print.

Loops never recurse: a for-loop or while-loop re-executes its body by rewinding the cursor to a saved index and walking
the same tokens again, so every side effect in the body is applied once per iteration. Bodies that must not run (a
for-loop whose start exceeds its end, the last pass of a while-loop) are stepped over by a Validator sharing the cursor.
"""

import logging
import sys

from toyscript.lang.error import DivisionByZero, InvalidLiteral, UndefinedVariable
from toyscript.lang.grammar import Cursor, Grammar
from toyscript.lang.numerical import divide, hex_number, number, wrap
from toyscript.lang.tokens import Token
from toyscript.lang.validator import Validator

logger = logging.getLogger(__name__)

OPERATORS = {
    Token.ADDITION: lambda left, right: wrap(left + right),
    Token.SUBTRACTION: lambda left, right: wrap(left - right),
    Token.MULTIPLICATION: lambda left, right: wrap(left * right),
    Token.DIVISION: divide,
    Token.BW_AND: lambda left, right: left & right,
    Token.BW_OR: lambda left, right: left | right,
    Token.GREATER_THAN: lambda left, right: int(left > right),
    Token.LOWER_THAN: lambda left, right: int(left < right),
    Token.COMPARISON: lambda left, right: int(left == right),
}


class Evaluator(Grammar):

    def __init__(self, cursor, environment, out=None):
        super().__init__(cursor)
        self.environment = environment
        self.out = out

    def _skip(self):
        """Validator over the same cursor, used to step over code that must not run."""
        return Validator(self.cursor)

    def literal(self, token):
        try:
            if token.kind is Token.HEX:
                return hex_number(token.lexeme)
            return number(token.lexeme)
        except ValueError:
            raise InvalidLiteral(token)

    def assign(self, name, value):
        return self.environment.assign(name.lexeme, value)

    def lookup(self, name):
        value = self.environment.get(name.lexeme)
        if value is None:
            raise UndefinedVariable(name)
        return value

    def binary(self, operator, left, right):
        try:
            return OPERATORS[operator.kind](left, right)
        except ZeroDivisionError:
            raise DivisionByZero(operator)

    def unary_op(self, operator, operand):
        if operator.kind is Token.SUBTRACTION:
            return wrap(-operand)
        return operand

    def console(self, value):
        print(value, file=self.out if self.out is not None else sys.stdout)
        return value

    def for_body(self, control, start, end):
        if start > end:
            self._skip().for_pass()
            return 0

        body = self.cursor.index
        counter = start
        while True:
            self.for_pass()
            if counter + 1 > end:
                break

            counter += 1
            self.assign(control, counter)
            logger.debug("for-loop over '%s' re-entered on line %d", control.lexeme, control.line)
            self.cursor.rewind(body)

        return 0

    def while_body(self, condition_index, condition):
        while condition:
            self.block_body()

            self.cursor.rewind(condition_index)
            condition = self.bitwise()
            self.cursor.match(Token.LEFT_BRACES)

        self._skip().block_body()
        return 0


def evaluate(tokens, environment, out=None):
    """Runs tokens against environment and returns the wrapped sum of the top-level statement values. tokens must
    have passed validate; out is where CONSOLE prints (stdout by default).
    """
    values = Evaluator(Cursor(tokens), environment, out).statements()
    return wrap(sum(values))
