from __future__ import annotations

import enum

from collections import deque
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

from .config import Config
from .errors import MalformedStructure, OutOfBounds, Underflow, UnexpectedToken
from .format import type_name
from .token import Token

T = TypeVar('T')


def is_content(what: Any) -> bool:
    """Whether `what` is matched against token content rather than type.

    Enum members (`StrEnum` included) are token types, other strings are
    token contents, anything else is a token type.
    """
    return isinstance(what, str) and not isinstance(what, enum.Enum)


def matches(token: Token, what: Any) -> bool:
    if is_content(what):
        return token.content == what
    return token.type == what


def display(what: Any) -> str:
    if is_content(what):
        return what
    return type_name(what)


class TokenStream:
    """Sequence of tokens consumed from the front.

    Operations that accept "content or type" dispatch on the argument:
    see `is_content`.

    ```
    stream = tokenize("f(a, b)", RULES)
    name = stream.next(Kind.IDENT)
    args = stream.end_of("(", ")").delimited_list(parse_arg, ",")
    ```
    """

    def __init__(self,
                 tokens: Iterable[Token] = (),
                 config: Optional[Config] = None):
        self._tokens: deque[Token] = deque(tokens)
        self.config = config

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def length(self) -> int:
        return len(self._tokens)

    def all(self) -> list[Token]:
        """Remaining tokens in the source order. Does not consume."""
        return list(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.all())

    def copy(self) -> TokenStream:
        return TokenStream(self._tokens, self.config)

    def prepend(self, token: Token):
        """Push the token back, so that it will be consumed next."""
        self._tokens.appendleft(token)

    def has(self, what: Any, index: int = 0) -> bool:
        if index < 0 or index >= len(self._tokens):
            return False
        return matches(self._tokens[index], what)

    def has_any(self, *options: Any, index: int = 0) -> bool:
        return any(self.has(option, index) for option in options)

    def get(self, index: int = 0) -> str:
        return self.get_token(index).content

    def get_token(self, index: int = 0) -> Token:
        if index < 0 or index >= len(self._tokens):
            raise OutOfBounds(f"desired index is out of bounds: {index}")
        return self._tokens[index]

    def skip(self, amount: int = 1):
        if amount > len(self._tokens):
            raise Underflow(f"cannot skip {amount} tokens, "
                            f"{len(self._tokens)} left")
        for _ in range(amount):
            self._tokens.popleft()

    def skip_all(self, what: Any):
        while self.has(what):
            self._tokens.popleft()

    def remove(self, what: Any):
        """Delete all remaining tokens that match."""
        self._tokens = deque(tok for tok in self._tokens
                             if not matches(tok, what))

    def next_token(self) -> Token:
        if not self._tokens:
            raise Underflow("cannot advance an empty stream")
        return self._tokens.popleft()

    def next(self, expected: Any = None) -> str:
        """Consume the next token and return its content.

        If `expected` is given, the token must match it, otherwise
        UnexpectedToken is raised with the excerpt around the token.

        Raises:
            Underflow, UnexpectedToken
        """
        token = self.next_token()
        if expected is None or matches(token, expected):
            return token.content

        if is_content(expected):
            msg = (f"Unexpected token '{token.content}', "
                   f"expected '{expected}'")
        else:
            msg = (f"Unexpected token '{token.content}', "
                   f"expected token of type '{type_name(expected)}'")
        token.error(msg, UnexpectedToken, self.config)

    def optional(self, what: Any) -> bool:
        if self.has(what):
            self._tokens.popleft()
            return True
        return False

    def until(self, what: Any) -> TokenStream:
        """Move out all tokens before the first match.

        If nothing matches, the whole stream is moved out.
        """
        result = []
        while self._tokens and not self.has(what):
            result.append(self._tokens.popleft())
        return TokenStream(result, self.config)

    def end_of(self, open: Any, close: Any) -> TokenStream:
        """Move out the balanced run after the first `open`.

        Tokens up to and including the first `open` are dropped. Nested
        `open`/`close` pairs are kept in the result, the `close` balancing
        the first `open` is consumed but not returned.

        Raises:
            MalformedStructure: No `open`, or the stream ended before the
                structure was closed.
        """
        if is_content(open) == is_content(close) and open == close:
            raise ValueError("open and close boundaries must differ")

        boundaries = f"{display(open)}{display(close)}"

        self.until(open)
        if not self._tokens:
            raise MalformedStructure(
                f"the specified boundaries {boundaries!r} don't exist",
                open, close)
        self._tokens.popleft()

        result = []
        depth = 1
        while self._tokens:
            if self.has(open):
                depth += 1
            elif self.has(close):
                depth -= 1
            token = self._tokens.popleft()
            if depth == 0:
                return TokenStream(result, self.config)
            result.append(token)

        raise MalformedStructure(
            f"the stream ended before {display(close)!r} closing "
            f"{display(open)!r}", open, close)

    def delimited_list(self,
                       parse_item: Callable[[TokenStream], T],
                       delimiter: Any,
                       interrupt: Any = None) -> list[T]:
        """Parse items separated by a delimiter.

        Parsing stops when the stream is exhausted or, if `interrupt` is
        given, before the `interrupt` token, which is left in the stream.

        Raises:
            UnexpectedToken: An item is not followed by the delimiter.
        """
        results = []

        while self._tokens:
            results.append(parse_item(self))

            if interrupt is not None and self.has(interrupt):
                break

            if self._tokens:
                self.next(delimiter)

        return results

    def __repr__(self):
        return f"<TokenStream: {len(self._tokens)} tokens>"

    def __str__(self):
        return ' '.join(str(tok) for tok in self._tokens)
