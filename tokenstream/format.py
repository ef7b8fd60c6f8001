"""Text helpers used to render diagnostics.

Nothing in here is part of the token stream contract: the exact colors and
layout of an excerpt may change freely.
"""

import enum

from typing import Any

FOREGROUND_OFFSET = 30
BACKGROUND_OFFSET = 40


class Color(enum.IntEnum):
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    LIGHT_GRAY = 7
    DARK_GRAY = 60
    LIGHT_RED = 61
    LIGHT_GREEN = 62
    LIGHT_YELLOW = 63
    LIGHT_BLUE = 64
    LIGHT_MAGENTA = 65
    LIGHT_CYAN = 66
    WHITE = 67


COLOR_NAMES = tuple(c.name.lower() for c in Color)


def _color(name: str | Color) -> Color:
    if isinstance(name, Color):
        return name
    try:
        return Color[name.strip().upper().replace(' ', '_')]
    except KeyError:
        raise ValueError(f"unknown color: {name!r}") from None


def color(name: str | Color, text: str) -> str:
    """Wrap the text in escape codes that set the foreground color."""
    code = _color(name) + FOREGROUND_OFFSET
    return f"\x1b[{code}m{text}\x1b[0m"


def background(name: str | Color, text: str) -> str:
    """Wrap the text in escape codes that set the background color."""
    code = _color(name) + BACKGROUND_OFFSET
    return f"\x1b[{code}m{text}\x1b[0m"


def indent(string: str, level: int = 1, indent: str = '    ') -> str:
    """Prepend `level` indents to every non-empty line of the string."""
    prefix = indent * level
    return '\n'.join(prefix + line if line else line
                     for line in string.split('\n'))


def normalize_linebreaks(string: str) -> str:
    return string.replace('\r', '')


def type_name(tp: Any) -> str:
    """Display form of a token type."""
    if isinstance(tp, enum.Enum):
        return tp.name
    return str(tp)


def frame(text: str, width: int = 40) -> str:
    bar = '=' * width
    return f"{bar}\n{text}\n{bar}"


def render_excerpt(source: str,
                   position: int,
                   length: int,
                   *,
                   context_lines: int = 1,
                   highlight: str | Color = Color.RED,
                   use_color: bool = True) -> tuple[int, str]:
    """Render the lines around a span of the source.

    The span `source[position:position + length]` is highlighted with
    the background color, lines are prefixed with a right-aligned line
    number gutter:

    ```
    1 | x = (1 +
    2 | y = 2 }
    3 | z = 3
    ```

    Args:
        context_lines: Number of lines shown before and after the line
            the span starts on. Clamped to the source.
        highlight: Background color of the span.
        use_color: If false, no escape codes are emitted.

    Returns:
        1-based line number of the span and the excerpt.
    """
    position = max(0, min(position, len(source)))
    prefix = source[:position]
    body = source[position:position + length]
    suffix = source[position + length:]

    if use_color and body:
        body = '\n'.join(background(highlight, part) if part else part
                         for part in body.split('\n'))

    lines = normalize_linebreaks(prefix + body + suffix).split('\n')
    index = prefix.count('\n')

    start = max(0, index - context_lines)
    end = min(len(lines), index + context_lines + 1)
    width = len(str(end))

    excerpt = '\n'.join(f"{str(i + 1).rjust(width)} | {line}"
                        for i, line in enumerate(lines[start:end], start))
    return index + 1, excerpt
