from __future__ import annotations

import logging

from typing import Any, NamedTuple, NoReturn, Optional, Type

from .config import Config, default_config
from .errors import ParseError
from .format import color, frame, render_excerpt, type_name

logger = logging.getLogger("tokenstream.diagnostic")


class Diagnostic(NamedTuple):
    message: str
    line: int
    excerpt: str

    def report(self, width: int = 40) -> str:
        """Excerpt framed with bars, followed by the message."""
        framed = frame(self.excerpt, width)
        return f"{framed}\n{self.message} (line {self.line})"


class Token:
    """Typed piece of the source text.

    Immutable. A token keeps a reference to the whole source it was taken
    from, so that an error can show the lines around it.

    Parameters:
        content: Matched text.
        type: Token kind. Any value comparable with `==`, usually an
              `enum.Enum` member.
        position: Offset of the first character of `content` in `source`.
        source: Original text. Defaults to `content`.
    """

    __slots__ = ('content', 'type', 'position', 'source')

    content: str
    type: Any
    position: int
    source: str

    def __init__(self,
                 content: str,
                 type: Any,
                 position: int = 0,
                 source: Optional[str] = None):
        super().__setattr__('content', content)
        super().__setattr__('type', type)
        super().__setattr__('position', position)
        super().__setattr__('source', content if source is None else source)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"token attribute {name!r} is read-only")

    def __delattr__(self, name: str):
        raise AttributeError(f"token attribute {name!r} is read-only")

    @property
    def end(self) -> int:
        return self.position + len(self.content)

    @property
    def line(self) -> int:
        return self.source.count('\n', 0, self.position) + 1

    @property
    def column(self) -> int:
        return self.position - self.source.rfind('\n', 0, self.position)

    def concatenate(self, other: Token, type: Any = None) -> Token:
        """Merge two tokens into one.

        The result keeps the position and the source of this token.
        """
        return Token(self.content + other.content,
                     self.type if type is None else type,
                     self.position,
                     self.source)

    def __add__(self, other: Token) -> Token:
        if not isinstance(other, Token):
            return NotImplemented
        return self.concatenate(other)

    def diagnose(self,
                 message: str,
                 config: Optional[Config] = None) -> Diagnostic:
        """Render the source excerpt around the token."""
        if config is None:
            config = default_config()
        line, excerpt = render_excerpt(self.source,
                                       self.position,
                                       len(self.content),
                                       context_lines=config.context_lines,
                                       highlight=config.highlight,
                                       use_color=config.color)
        return Diagnostic(message, line, excerpt)

    def error(self,
              message: str,
              error_class: Type[ParseError] = ParseError,
              config: Optional[Config] = None) -> NoReturn:
        """Report the error at this token and abort parsing.

        The diagnostic is logged to the `tokenstream.diagnostic` logger
        before the exception is raised.

        Raises:
            error_class, ParseError by default.
        """
        if config is None:
            config = default_config()
        diagnostic = self.diagnose(message, config)
        logger.error("\n%s\n", diagnostic.report(config.bar_width))
        raise error_class(message, token=self, diagnostic=diagnostic)

    def __eq__(self, other):
        if isinstance(other, Token):
            self_tup = (self.content, self.type, self.position, self.source)
            other_tup = (other.content, other.type, other.position,
                         other.source)
            return self_tup == other_tup
        return NotImplemented

    def __hash__(self):
        return hash((self.content, self.type, self.position))

    def __repr__(self):
        return f"Token({self.content!r}, {self.type!r}, {self.position})"

    def __str__(self):
        return f"({type_name(self.type)}: {color('blue', self.content)})"
