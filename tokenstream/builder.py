from __future__ import annotations

import logging
import re

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from .config import Config, default_config
from .errors import RuleError, TokenizeError
from .format import render_excerpt, type_name
from .stream import TokenStream
from .token import Token

logger = logging.getLogger("tokenstream.builder")

Pattern = str | re.Pattern
Rules = Iterable[tuple[Pattern, Any]] | Mapping[Pattern, Any]
CompiledRules = list[tuple[re.Pattern, Any]]


def _unanchor(pattern: Pattern) -> re.Pattern:
    """Compile the pattern without a leading `^`.

    Patterns are matched at the scan offset with `Pattern.match(source,
    pos)`, where `^` would only match at the start of the source.
    """
    if isinstance(pattern, re.Pattern):
        if not pattern.pattern.startswith("^"):
            return pattern
        return re.compile(pattern.pattern[1:], pattern.flags)
    if isinstance(pattern, str) and pattern.startswith("^"):
        pattern = pattern[1:]
    return re.compile(pattern)


def compile_rules(rules: Rules) -> CompiledRules:
    """Compile the tokenizer rules, preserving their order.

    The rules are checked in the given order and the first match wins, so
    more specific patterns must precede general ones. A mapping is taken
    in its iteration order.

    Raises:
        RuleError: A pattern is not a valid regular expression.
    """
    if isinstance(rules, Mapping):
        rules = rules.items()

    compiled: CompiledRules = []
    for pattern, type in rules:
        try:
            compiled.append((_unanchor(pattern), type))
        except (re.error, TypeError) as e:
            msg = f"invalid pattern for {type_name(type)}: {pattern!r}: {e}"
            raise RuleError(msg) from e
    return compiled


class TokenStreamBuilder:
    """Accumulates tokens found in the source.

    Positions of appended tokens are searched in the original source
    starting from the end of the previous token, so that equal contents
    get increasing positions.
    """

    def __init__(self, source: str, config: Optional[Config] = None):
        self.source = source
        self.config = default_config() if config is None else config
        self.index = 0
        self.tokens: list[Token] = []

    def stream(self) -> TokenStream:
        return TokenStream(self.tokens, self.config)

    def append(self,
               content: str,
               type: Any,
               position: Optional[int] = None) -> Token:
        """Record the token.

        Raises:
            TokenizeError: `content` is not found after the previous token.
        """
        if position is None:
            position = self.source.find(content, self.index)
            if position == -1:
                raise self._error(f"{content!r} not found in the source",
                                  self.index)
        self.index = position + len(content)
        token = Token(content, type, position, self.source)
        self.tokens.append(token)
        return token

    def _error(self, message: str, position: int) -> TokenizeError:
        config = self.config
        line, excerpt = render_excerpt(self.source, position, 1,
                                       context_lines=config.context_lines,
                                       highlight=config.highlight,
                                       use_color=config.color)
        return TokenizeError(f"{message} (line {line})",
                             self.source, position, excerpt)

    @classmethod
    def regex(cls,
              source: str,
              rules: Rules,
              config: Optional[Config] = None) -> TokenStream:
        """Split the source into tokens using the regex rules.

        Whitespace (the `whitespace` option) between tokens is skipped.
        Each rule pattern is matched at the beginning of the remaining
        text, the first non-empty match wins.

        Args:
            rules: Ordered `(pattern, type)` pairs.

        Raises:
            RuleError, TokenizeError
        """
        builder = cls(source, config)
        compiled = compile_rules(rules)
        try:
            whitespace = _unanchor(builder.config.whitespace)
        except re.error as e:
            raise RuleError(f"invalid whitespace pattern: {e}") from e

        pos, end = 0, len(source)
        while pos < end:
            if m := whitespace.match(source, pos):
                pos = m.end()
            if pos == end:
                break

            for pattern, type in compiled:
                m = pattern.match(source, pos)
                if m and m.end() > pos:
                    break
            else:
                rest = source[pos:pos + 20]
                raise builder._error(f"no rule matches {rest!r}", pos)

            token = builder.append(m.group(), type, pos)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%r at %d:%d", token, token.line, token.column)
            pos = m.end()

        logger.info("%d tokens", len(builder.tokens))
        return builder.stream()


def tokenize(source: str,
             rules: Rules,
             config: Optional[Config] = None) -> TokenStream:
    return TokenStreamBuilder.regex(source, rules, config)
