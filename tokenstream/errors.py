from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional


class Errors(StrEnum):
    UNDERFLOW = "underflow"
    OUT_OF_BOUNDS = "out-of-bounds"
    PARSE_ERROR = "parse-error"
    UNEXPECTED_TOKEN = "unexpected-token"
    MALFORMED_STRUCTURE = "malformed-structure"
    TOKENIZE_ERROR = "tokenize-error"
    INVALID_RULE = "invalid-rule"


class TokenStreamError(Exception):
    """Base class for all errors raised by the library."""

    what = Errors.PARSE_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Underflow(TokenStreamError, IndexError):
    """Consuming operation invoked on a stream with too few tokens."""

    what = Errors.UNDERFLOW


class OutOfBounds(TokenStreamError, IndexError):
    """Lookahead index beyond the end of the stream."""

    what = Errors.OUT_OF_BOUNDS


class ParseError(TokenStreamError):
    """Parsing failed at a token.

    Carries the offending token and the rendered diagnostic, so the caller
    can show the source excerpt again without re-rendering it.
    """

    def __init__(self, message: str, token=None, diagnostic=None):
        super().__init__(message)
        self.token = token
        self.diagnostic = diagnostic

    @property
    def excerpt(self) -> Optional[str]:
        return self.diagnostic.excerpt if self.diagnostic else None

    @property
    def line(self) -> Optional[int]:
        return self.diagnostic.line if self.diagnostic else None

    def __str__(self):
        if self.diagnostic is None:
            return self.message
        return f"{self.message}\n\n{self.diagnostic.excerpt}"


class UnexpectedToken(ParseError):
    what = Errors.UNEXPECTED_TOKEN


class MalformedStructure(TokenStreamError):
    """Balanced scan could not find its boundaries."""

    what = Errors.MALFORMED_STRUCTURE

    def __init__(self, message: str, open: Any, close: Any):
        super().__init__(message)
        self.open = open
        self.close = close


class TokenizeError(TokenStreamError):
    """No tokenizer rule matches the remaining text."""

    what = Errors.TOKENIZE_ERROR

    def __init__(self,
                 message: str,
                 source: str,
                 position: int,
                 excerpt: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.position = position
        self.excerpt = excerpt

    @property
    def remainder(self) -> str:
        return self.source[self.position:]

    @property
    def line(self) -> int:
        return self.source.count('\n', 0, self.position) + 1

    def __str__(self):
        if self.excerpt is None:
            return self.message
        return f"{self.message}\n\n{self.excerpt}"


class RuleError(TokenStreamError):
    what = Errors.INVALID_RULE
