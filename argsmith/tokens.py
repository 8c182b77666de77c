"""
Argsmith token classification.

Every raw token of an argument vector has exactly one lexical shape. The shape
decides how the registry's parse loop treats the token; nothing else about the
token (known/unknown flag, value or not) is decided here.

Shapes (checked in this order)
- POSITIONAL: a single character, anything not starting with '-', or exactly '--'.
- SHORT_FLAG: '-x' (dash plus one character).
- COMBINED_SHORT_FLAGS: '-xyz' (single dash, more than one character).
- LONG_FLAG_WITH_VALUE: '--name=value' (the first '=' splits name and value).
- LONG_FLAG_WITHOUT_VALUE: '--name'.

Contract
- classify() requires a non-empty string; an empty token never comes out of a
  real argument vector, so it is rejected with ValueError instead of being
  quietly read as a positional.
"""
from enum import IntEnum


class TokenKind(IntEnum):
    """lexical shape of a single command-line token."""
    POSITIONAL              = 0
    SHORT_FLAG              = 1
    COMBINED_SHORT_FLAGS    = 2
    LONG_FLAG_WITH_VALUE    = 3
    LONG_FLAG_WITHOUT_VALUE = 4

    @property
    def flagged(self):
        """True for every shape that names a flag."""
        return self is not TokenKind.POSITIONAL

    @property
    def long(self):
        return self in (TokenKind.LONG_FLAG_WITH_VALUE, TokenKind.LONG_FLAG_WITHOUT_VALUE)


def classify(token, /):
    """
    return the TokenKind of a raw token.

    errors
    - TypeError when token is not a string.
    - ValueError when token is empty.
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if not token:
        raise ValueError("classify() argument cannot be an empty token")

    if len(token) == 1 or not token.startswith("-") or token == "--":
        return TokenKind.POSITIONAL
    if len(token) == 2:
        return TokenKind.SHORT_FLAG
    if not token.startswith("--"):
        return TokenKind.COMBINED_SHORT_FLAGS
    if "=" in token:
        return TokenKind.LONG_FLAG_WITH_VALUE
    return TokenKind.LONG_FLAG_WITHOUT_VALUE


def split_long(token, /):
    """
    split a long flag token at its first '='.

    returns
    - (name, value) for '--name=value' (value may be an empty string).
    - (name, None) when there is no '='.
    """
    name, separator, value = token.partition("=")
    return name, (value if separator else None)


__all__ = (
    "TokenKind",
    "classify",
    "split_long",
)
