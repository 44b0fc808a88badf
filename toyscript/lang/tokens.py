"""Token kinds and token records shared by the scanner, the validator and the evaluator.

Token kinds double as scanner states: the DFA in scanner.py is indexed by the value of the current Token, with NONE
as the start state.
"""

from dataclasses import dataclass
from enum import Enum


class Token(Enum):
    NONE = 0
    MULTIPLICATION = 1
    DIVISION = 2
    ADDITION = 3
    SUBTRACTION = 4
    BW_AND = 5
    BW_OR = 6
    INT = 7
    HEX = 8
    LEFT_PARENTHESES = 9
    RIGHT_PARENTHESES = 10
    LEFT_BRACES = 11
    RIGHT_BRACES = 12
    IDENTIFIER = 13
    ASSIGNMENT = 14
    GREATER_THAN = 15
    LOWER_THAN = 16
    COMPARISON = 17
    SEMICOLON = 18
    FOR = 19
    WHILE = 20
    IN = 21     # reserved keyword, no grammar rule uses it
    RANGE = 22
    BEGIN = 23
    END = 24
    TO = 25
    CONSOLE = 26
    IGNORE = 27
    EOT = 28
    EOF = 29
    ERROR = 30

    def __str__(self):
        return self.name


NUM_STATES = len(Token)

KEYWORDS = {
    "for": Token.FOR,
    "while": Token.WHILE,
    "in": Token.IN,
    "begin": Token.BEGIN,
    "end": Token.END,
    "to": Token.TO,
    "CONSOLE": Token.CONSOLE,
}


@dataclass(frozen=True)
class Position:
    """1-based location of a byte in the source."""
    row: int = 1
    col: int = 1

    def advance(self, code):
        """Returns the position following byte code."""
        if code == ord("\n"):
            return Position(self.row + 1, 1)
        return Position(self.row, self.col + 1)

    def __str__(self):
        return f"{self.row}:{self.col}"


@dataclass(frozen=True)
class TokenInfo:
    kind: Token
    lexeme: str
    position: Position

    @property
    def line(self):
        return self.position.row

    def __str__(self):
        return f"{self.kind}('{self.lexeme}') at {self.position}"
