"""Tokenizer and token stream for hand-written recursive descent parsers.

```
class Kind(StrEnum):
    NUMBER = "number"
    PLUS = "plus"

stream = tokenize("12 + 34", [(r"\\d+", Kind.NUMBER), (r"\\+", Kind.PLUS)])
lhs = stream.next(Kind.NUMBER)
stream.next("+")
rhs = stream.next(Kind.NUMBER)
```
"""

from .__version__ import __version__
from .builder import TokenStreamBuilder, compile_rules, tokenize
from .config import Config, ConfigError, Option, default_config
from .errors import (
    Errors,
    TokenStreamError,
    Underflow,
    OutOfBounds,
    ParseError,
    UnexpectedToken,
    MalformedStructure,
    TokenizeError,
    RuleError
)
from .stream import TokenStream
from .token import Diagnostic, Token

__all__ = [
    "__version__",
    "Config",
    "ConfigError",
    "Diagnostic",
    "Errors",
    "MalformedStructure",
    "Option",
    "OutOfBounds",
    "ParseError",
    "RuleError",
    "Token",
    "TokenStream",
    "TokenStreamBuilder",
    "TokenStreamError",
    "TokenizeError",
    "Underflow",
    "UnexpectedToken",
    "compile_rules",
    "default_config",
    "tokenize",
]
