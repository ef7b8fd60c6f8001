import logging

from pathlib import Path
from typing import Iterable, Optional

from tokenstream.builder import CompiledRules, compile_rules, tokenize
from tokenstream.config import (
    Config,
    SCHEMA,
    default_config,
    eval_file,
    read_file
)
from tokenstream.stream import TokenStream

logging.basicConfig(format="{name}: {message}", style="{")
logger = logging.getLogger("tokenstream")


class FileEvalError(Exception):
    """Error occured in the file evaluation process."""


class RulesNotFound(FileEvalError):
    pass


def set_verbosity(verbose: int):
    if verbose >= 2:
        logger.setLevel(logging.DEBUG)
    elif verbose == 1:
        logger.setLevel(logging.INFO)


def create_config(config_file: Optional[Path] = None,
                  options: Iterable[str] = ()) -> Config:
    if config_file:
        logger.info("config file %s", config_file)
        config = read_file(SCHEMA, config_file)
    else:
        config = default_config()

    options = list(options)
    if options:
        config.parse(options)
    return config


def load_rules(file: Path) -> CompiledRules:
    """Evaluate the rules file and compile its `RULES`.

    `RULES` is an ordered list of `(pattern, type)` pairs.
    """
    namespace = eval_file(file, FileEvalError)
    try:
        rules = namespace["RULES"]
    except KeyError:
        raise RulesNotFound(f"{file} does not define RULES") from None

    compiled = compile_rules(rules)
    logger.info("%d rules loaded from %s", len(compiled), file)
    return compiled


def tokenize_file(source_file: Path,
                  rules: CompiledRules,
                  config: Optional[Config] = None) -> TokenStream:
    with open(source_file, 'r', encoding="UTF-8") as fin:
        source = fin.read()

    logger.info("tokenizing %s", source_file)
    return tokenize(source, rules, config)

