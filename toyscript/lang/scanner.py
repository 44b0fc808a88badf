"""Lexical analysis for toyscript: a table-driven DFA turning a byte stream into a tuple of TokenInfos.

The transition table is indexed by (state, byte), where states are Token kinds and NONE is the start state. Reading
a byte whose transition is NONE ends the current token; that byte is carried over and becomes the first byte of the
next token. Whitespace is scanned as IGNORE tokens, which never leave the scanner.
"""

import io
import logging

from toyscript.lang.error import InvalidPattern, InvalidStream
from toyscript.lang.tokens import KEYWORDS, NUM_STATES, Position, Token, TokenInfo

logger = logging.getLogger(__name__)

ALPHABET_LEN = 256
WHITESPACE = " \t\r\n"

FINAL_STATES = frozenset({
    Token.INT, Token.HEX, Token.END, Token.MULTIPLICATION, Token.DIVISION, Token.ADDITION, Token.SUBTRACTION,
    Token.EOF, Token.IDENTIFIER, Token.NONE, Token.LEFT_PARENTHESES, Token.RIGHT_PARENTHESES, Token.LEFT_BRACES,
    Token.RIGHT_BRACES, Token.ASSIGNMENT, Token.SEMICOLON, Token.FOR, Token.WHILE, Token.BEGIN, Token.TO,
    Token.CONSOLE, Token.IGNORE, Token.BW_AND, Token.BW_OR, Token.RANGE, Token.IN, Token.GREATER_THAN,
    Token.LOWER_THAN, Token.COMPARISON,
})


def _chars(first, last):
    return "".join(chr(code) for code in range(ord(first), ord(last) + 1))


def create_transitions_table():
    """Returns the NUM_STATES x ALPHABET_LEN transition table. Unset transitions are Token.NONE."""
    table = [[Token.NONE] * ALPHABET_LEN for _ in range(NUM_STATES)]

    def set_transitions(from_state, chars, to_state):
        for char in chars:
            table[from_state.value][ord(char)] = to_state

    set_transitions(Token.NONE, ";", Token.SEMICOLON)
    set_transitions(Token.NONE, ":", Token.ASSIGNMENT)
    set_transitions(Token.ASSIGNMENT, "=", Token.ASSIGNMENT)

    digits = _chars("0", "9")
    set_transitions(Token.NONE, digits, Token.INT)
    set_transitions(Token.INT, digits, Token.INT)
    set_transitions(Token.HEX, digits, Token.HEX)
    set_transitions(Token.IDENTIFIER, digits, Token.IDENTIFIER)

    set_transitions(Token.NONE, "+", Token.ADDITION)
    set_transitions(Token.NONE, "-", Token.SUBTRACTION)
    set_transitions(Token.NONE, "*", Token.MULTIPLICATION)
    set_transitions(Token.NONE, "/", Token.DIVISION)
    set_transitions(Token.NONE, "&", Token.BW_AND)
    set_transitions(Token.NONE, "|", Token.BW_OR)
    set_transitions(Token.NONE, ">", Token.GREATER_THAN)
    set_transitions(Token.NONE, "<", Token.LOWER_THAN)

    set_transitions(Token.NONE, "=", Token.COMPARISON)
    set_transitions(Token.COMPARISON, "=", Token.COMPARISON)

    set_transitions(Token.NONE, "#", Token.HEX)
    set_transitions(Token.HEX, _chars("A", "F") + _chars("a", "f"), Token.HEX)

    letters = _chars("a", "z") + _chars("A", "Z")
    set_transitions(Token.NONE, letters, Token.IDENTIFIER)
    set_transitions(Token.IDENTIFIER, letters, Token.IDENTIFIER)

    set_transitions(Token.NONE, WHITESPACE, Token.EOT)

    set_transitions(Token.NONE, "(", Token.LEFT_PARENTHESES)
    set_transitions(Token.NONE, ")", Token.RIGHT_PARENTHESES)
    set_transitions(Token.NONE, "{", Token.LEFT_BRACES)
    set_transitions(Token.NONE, "}", Token.RIGHT_BRACES)

    set_transitions(Token.NONE, ".", Token.RANGE)
    set_transitions(Token.RANGE, ".", Token.RANGE)

    set_transitions(Token.NONE, chr(Token.EOF.value), Token.EOF)
    return table


TRANSITIONS = create_transitions_table()


class DFA:
    """Scans one stream. Keeps the carried lookahead byte and the position of the next unread byte."""

    def __init__(self, stream, table=TRANSITIONS):
        self.stream = stream
        self.table = table
        self.position = Position()
        self.last = None  # (byte, position) carried over from the previous token

    def read(self):
        """Returns (byte, position) of the next byte in the stream, or None if it is exhausted."""
        try:
            data = self.stream.read(1)
        except OSError as error:
            raise InvalidStream() from error

        if not data:
            return None

        code = data[0]
        position = self.position
        self.position = position.advance(code)
        return code, position

    def next_token(self):
        """Scans and returns the next TokenInfo. Returns an IGNORE token for a consumed whitespace byte and an EOF
        token once the stream is exhausted.
        """
        if self.last is not None:
            (code, start), self.last = self.last, None
        else:
            read = self.read()
            if read is None:
                return TokenInfo(Token.EOF, "", self.position)
            code, start = read

        state = Token.NONE
        lexeme = bytearray()
        position = start

        while True:
            next_state = self.table[state.value][code]
            if next_state in (Token.NONE, Token.EOT, Token.EOF):
                if state is Token.NONE and next_state is Token.NONE and code != 0:
                    lexeme.append(code)
                    raise InvalidPattern(lexeme.decode("latin-1"), start)
                if state is not Token.NONE:
                    self.last = code, position
                break

            state = next_state
            lexeme.append(code)

            read = self.read()
            if read is None:
                break  # stream exhausted mid-token: this token ends here, the next call returns EOF
            code, position = read

        lexeme = lexeme.decode("latin-1")
        if state not in FINAL_STATES:
            raise InvalidPattern(lexeme, start)

        if state is Token.NONE:
            return TokenInfo(Token.IGNORE, lexeme, start)
        return TokenInfo(KEYWORDS.get(lexeme, state), lexeme, start)


def tokenize(stream):
    """Scans binary stream into a tuple of TokenInfos ending with exactly one EOF. Raises ScanError on the first
    unrecognized pattern or read failure.
    """
    dfa = DFA(stream)
    tokens = []

    token = dfa.next_token()
    while token.kind is not Token.EOF:
        if token.kind is not Token.IGNORE:
            tokens.append(token)
        token = dfa.next_token()

    tokens.append(TokenInfo(Token.EOF, "", dfa.position))
    logger.debug("scanned %d tokens", len(tokens))
    return tuple(tokens)


def scan(source):
    """Scans source, a str or bytes."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    return tokenize(io.BytesIO(source))
