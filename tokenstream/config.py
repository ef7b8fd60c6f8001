from __future__ import annotations

from types import ModuleType
from typing import Any, Callable, Iterable, Type
from os import PathLike

from .format import COLOR_NAMES


class ConfigError(Exception):
    """Exception class for Config related errors."""


class Enum:
    """Allowed values of an option."""

    def __init__(self, *variants: str | int | bool | None):
        self.variants = variants

    def match(self, value: Any) -> bool:
        return value in self.variants

    def __str__(self):
        variants = ' | '.join(str(v) for v in self.variants)
        return f"({variants})"


class Option:
    """Schema entry. Immutable.

    Parameters:
        type: Python type of the value or an `Enum` of allowed values.
        default: Value used until the option is assigned.
        help: Short description, shown by the command line.
    """

    type: type | Enum
    default: Any
    help: str

    def __init__(self, type, default=None, help=""):
        super().__setattr__('type', type)
        super().__setattr__('default', default)
        super().__setattr__('help', help)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"cannot assign option attribute {name!r}")

    @property
    def type_name(self) -> str:
        if isinstance(self.type, Enum):
            return str(self.type)
        return self.type.__name__


def _to_bool(value: Any) -> bool:
    if isinstance(value, (bool, int)):
        return bool(value)
    string = str(value).strip().lower()
    if string in ('true', 'yes', 'on', '1'):
        return True
    if string in ('false', 'no', 'off', '0'):
        return False
    raise ValueError(f"not a boolean: {value!r}")


_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    bool: _to_bool,
    int: int,
    str: str,
}


class Config:
    """Option values over a schema.

    Unassigned options read as their defaults. Options are read as
    attributes: `config.context_lines`.
    """

    def __init__(self, schema: dict[str, Option]):
        self.schema = schema
        self._values = {name: opt.default for name, opt in schema.items()}

    def override(self, options: dict[str, Any]):
        """Assign the options.

        Values of a wrong type are converted when the option type knows
        how, so `{"context_lines": "2"}` is accepted. Nothing is assigned
        if any of the options is invalid.

        Raises:
            ConfigError
        """
        values = {name: self._check(name, value)
                  for name, value in options.items()}
        self._values.update(values)

    def parse(self, it: Iterable[str]):
        """Assign options given as `<name>=<value>` strings.

        Everything after the first `=` is the value.

        Raises:
            ConfigError
        """
        options = {}
        for s in it:
            name, sep, value = s.partition('=')
            if not sep:
                raise ConfigError(f"expected <name>=<value>, got {s!r}")
            options[name.strip()] = value
        self.override(options)

    def _check(self, name: str, value: Any) -> Any:
        option = self.schema.get(name)
        if option is None:
            raise ConfigError(f"no such option: {name!r}")

        tp = option.type
        if isinstance(tp, Enum):
            if not tp.match(value):
                raise ConfigError(f"option {name!r} must be one of the "
                                  f"following: {tp}, got {value!r}")
            return value

        if type(value) is tp:
            return value
        try:
            return _CONVERTERS[tp](value)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"option {name!r} must be of type "
                              f"{tp.__name__}, got {value!r}") from e

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"no such config value: {name!r}") from None


SCHEMA: dict[str, Option] = {
    "whitespace": Option(str, default=r"\s+",
                         help="pattern skipped between tokens"),
    "context_lines": Option(int, default=1,
                            help="lines shown around a failing token"),
    "color": Option(bool, default=True,
                    help="highlight diagnostics with escape codes"),
    "highlight": Option(Enum(*COLOR_NAMES), default="red",
                        help="background color of a failing token"),
    "bar_width": Option(int, default=40,
                        help="width of the bar framing a diagnostic"),
}


def default_config() -> Config:
    return Config(SCHEMA)


def read_file(schema: dict[str, Option],
              filename: str | PathLike[str]) -> Config:
    """Create Config object from a python file assigning options."""
    namespace = eval_file(filename, ConfigError)

    options = {attr: val for attr, val in namespace.items()
               if not attr.startswith('_')
               and not isinstance(val, ModuleType)}

    cfg = Config(schema)
    cfg.override(options)
    return cfg


def eval_file(filename: str | PathLike[str],
              error_class: Type[Exception]) -> dict[str, Any]:
    """Execute the python file and return its namespace.

    Any failure, including `sys.exit()` in the file, is reraised as
    `error_class`.
    """
    namespace: dict[str, Any] = {}

    try:
        with open(filename, 'rb') as fin:
            code = compile(fin.read(), filename, 'exec')
            exec(code, namespace)
    except OSError as e:
        raise error_class(f'cannot read {filename}: {e}') from e
    except SyntaxError as e:
        raise error_class(f'syntax error in {filename}: {e}') from e
    except SystemExit as e:
        raise error_class(f'{filename} called sys.exit()') from e
    except Exception as e:
        raise error_class(f'an exception in {filename}: {e}') from e

    return namespace
