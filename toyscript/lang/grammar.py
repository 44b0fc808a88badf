"""Recursive-descent grammar for toyscript, shared by the validator and the evaluator.

All grammar can be loosely defined as follows (lowest precedence first):

```
<statements>     ::= (<bitwise> ";")* <for>? EOF
<bitwise>        ::= <additive> (("&" | "|") <additive>)*
<additive>       ::= <multiplicative> (("+" | "-") <multiplicative>)*
<multiplicative> ::= <comparison> (("*" | "/") <comparison>)*
<comparison>     ::= <unary> ((">" | "<" | "==") <unary>)*
<unary>          ::= ("+" | "-")? <primary>
<primary>        ::= INT | HEX | IDENT (":=" <bitwise>)? | "(" <bitwise> ")"
                   | <for> | <while> | "{" <bitwise>* "}" | "CONSOLE" <bitwise>
<for>            ::= "for" "(" IDENT ":=" <bitwise> "to" <bitwise> ")" "begin" (<bitwise> (";" | "end"))* "end"
<while>          ::= "while" <bitwise> "{" <bitwise>* "}"
```

Grammar walks a Cursor over an immutable token tuple and never builds a tree. What a walk computes is left to
subclasses: Validator only recognizes, Evaluator computes values and mutates an Environment. Both raise the same
ParseErrors at the same tokens.
"""

from abc import ABC, abstractmethod

from toyscript.lang.error import (ExpectedOpeningBrace, ExpectedOpeningParenthesis, InvalidAssignment, InvalidFor,
                                  MissingClosingBrace, MissingClosingParenthesis, MissingSemicolon, UnexpectedToken)
from toyscript.lang.tokens import Token


class Cursor:
    """Read position in a token tuple. The tuple always ends with EOF, which is never stepped over."""
    CONTEXT = 3  # number of consumed lexemes shown in error messages

    def __init__(self, tokens):
        if not tokens or tokens[-1].kind is not Token.EOF:
            raise ValueError("token stream must end with EOF")
        self.tokens = tokens
        self.index = 0
        self.current = tokens[0]  # most recently examined token, matched or not

    def match(self, *kinds):
        """Consumes the next token and returns True if it is of one of kinds. Either way, the token becomes current."""
        self.current = self.tokens[self.index]
        if self.current.kind in kinds:
            if self.current.kind is not Token.EOF:
                self.index += 1
            return True
        return False

    @property
    def previous(self):
        """Most recently consumed token, or None at the start."""
        return self.tokens[self.index - 1] if self.index else None

    def rewind(self, index):
        self.index = index
        self.current = self.tokens[index]

    def context(self, n=CONTEXT):
        """Returns the last n consumed lexemes, oldest first."""
        lexemes = [token.lexeme for token in self.tokens[max(self.index - n, 0):self.index]]
        return " ".join(lexemes) if lexemes else "start of input"


class Grammar(ABC):
    """Superclass walking the toyscript grammar. Every rule returns whatever the subclass computes for it."""
    BITWISE = (Token.BW_AND, Token.BW_OR)
    ADDITIVE = (Token.ADDITION, Token.SUBTRACTION)
    MULTIPLICATIVE = (Token.MULTIPLICATION, Token.DIVISION)
    COMPARISON = (Token.GREATER_THAN, Token.LOWER_THAN, Token.COMPARISON)
    UNARY = (Token.ADDITION, Token.SUBTRACTION)

    def __init__(self, cursor):
        self.cursor = cursor

    # capabilities

    @abstractmethod
    def literal(self, token):
        """Value of INT or HEX token."""

    @abstractmethod
    def assign(self, name, value):
        """Binds value to name (an IDENTIFIER token) and returns the bound value."""

    @abstractmethod
    def lookup(self, name):
        """Value bound to name (an IDENTIFIER token)."""

    @abstractmethod
    def binary(self, operator, left, right):
        """Value of left <operator> right, where operator is the operator token."""

    @abstractmethod
    def unary_op(self, operator, operand):
        """Value of <operator> operand, where operator is '+' or '-'."""

    @abstractmethod
    def console(self, value):
        """Value of a CONSOLE statement."""

    @abstractmethod
    def for_body(self, control, start, end):
        """Walks the body of a for-loop. The cursor is on the first token after 'begin'."""

    @abstractmethod
    def while_body(self, condition_index, condition):
        """Walks the body of a while-loop. The cursor is on the first token after '{', condition_index on the first
        token of the condition.
        """

    # rules

    def statements(self):
        """Walks every statement up to EOF and returns the list of their values. A for-loop closed by its
        'end' needs no ';' when it is the last statement.
        """
        values = []
        while not self.cursor.match(Token.EOF):
            values.append(self.bitwise())
            if self.cursor.match(Token.EOF) and self.cursor.previous.kind is Token.END:
                break
            self.end_of_statement()
        return values

    def end_of_statement(self):
        if not self.cursor.match(Token.SEMICOLON):
            raise MissingSemicolon(self.cursor.current)

    def _binary(self, operand, operators):
        value = operand()
        while self.cursor.match(*operators):
            operator = self.cursor.current
            value = self.binary(operator, value, operand())
        return value

    def bitwise(self):
        return self._binary(self.additive, Grammar.BITWISE)

    def additive(self):
        return self._binary(self.multiplicative, Grammar.ADDITIVE)

    def multiplicative(self):
        return self._binary(self.comparison, Grammar.MULTIPLICATIVE)

    def comparison(self):
        return self._binary(self.unary, Grammar.COMPARISON)

    def unary(self):
        if self.cursor.match(*Grammar.UNARY):
            operator = self.cursor.current
            return self.unary_op(operator, self.primary())
        return self.primary()

    def primary(self):
        cursor = self.cursor

        if cursor.match(Token.INT, Token.HEX):
            return self.literal(cursor.current)

        if cursor.match(Token.IDENTIFIER):
            name = cursor.current
            if cursor.match(Token.ASSIGNMENT):
                return self.assign(name, self.bitwise())
            return self.lookup(name)

        if cursor.match(Token.LEFT_PARENTHESES):
            value = self.bitwise()
            if not cursor.match(Token.RIGHT_PARENTHESES):
                raise MissingClosingParenthesis(cursor.current)
            return value

        if cursor.match(Token.FOR):
            return self.for_statement()

        if cursor.match(Token.WHILE):
            return self.while_statement()

        if cursor.match(Token.LEFT_BRACES):
            values = self.block_body()
            return values[-1] if values else 0

        if cursor.match(Token.CONSOLE):
            return self.console(self.bitwise())

        raise UnexpectedToken(cursor.current, cursor.context())

    def for_statement(self):
        """Walks a for-loop header, binding the start value to the control variable before the end bound is walked,
        then hands the body to for_body.
        """
        cursor = self.cursor
        if not cursor.match(Token.LEFT_PARENTHESES):
            raise ExpectedOpeningParenthesis(cursor.current)

        if not cursor.match(Token.IDENTIFIER):
            raise InvalidAssignment(cursor.current, cursor.context())
        control = cursor.current
        if not cursor.match(Token.ASSIGNMENT):
            raise InvalidAssignment(cursor.current, cursor.context())
        start = self.assign(control, self.bitwise())

        if not cursor.match(Token.TO):
            raise InvalidFor(cursor.current)
        end = self.bitwise()

        if not cursor.match(Token.RIGHT_PARENTHESES):
            raise MissingClosingParenthesis(cursor.current)
        if not cursor.match(Token.BEGIN):
            raise InvalidFor(cursor.current)

        return self.for_body(control, start, end)

    def for_pass(self):
        """Walks one pass over a for-loop body, up to and including its 'end'. Semicolons separate statements."""
        while not self.cursor.match(Token.END):
            self.bitwise()
            if self.cursor.match(Token.END):
                break
            self.end_of_statement()

    def while_statement(self):
        condition_index = self.cursor.index
        condition = self.bitwise()
        if not self.cursor.match(Token.LEFT_BRACES):
            raise ExpectedOpeningBrace(self.cursor.current)
        return self.while_body(condition_index, condition)

    def block_body(self):
        """Walks expressions up to and including '}' and returns the list of their values."""
        values = []
        while not self.cursor.match(Token.RIGHT_BRACES):
            if self.cursor.match(Token.EOF):
                raise MissingClosingBrace(self.cursor.current)
            values.append(self.bitwise())
        return values
