"""Signed 64-bit integers for toyscript. Python ints are unbounded, so every arithmetic result is wrapped back into
the two's complement range here.
"""

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap(num):
    """Returns num wrapped into the signed 64-bit range."""
    return (num - INT64_MIN) % (1 << 64) + INT64_MIN


def _checked(num, lexeme):
    if not INT64_MIN <= num <= INT64_MAX:
        raise ValueError(f"'{lexeme}' does not fit in 64 bits")
    return num


def number(lexeme):
    """Returns the value of a decimal literal. Raises ValueError if lexeme is not one or is out of range."""
    if not (lexeme.isascii() and lexeme.isdigit()):
        raise ValueError(f"expected decimal literal, got '{lexeme}'")
    return _checked(int(lexeme, 10), lexeme)


def hex_number(lexeme):
    """Returns the value of a hex literal such as '#FF'."""
    digits = lexeme.lstrip("#")
    if not digits:
        raise ValueError(f"expected hex digits after '#', got '{lexeme}'")
    return _checked(int(digits, 16), lexeme)


def divide(dividend, divisor):
    """Integer division truncating toward zero. Raises ZeroDivisionError like Python's own division."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return wrap(quotient)
