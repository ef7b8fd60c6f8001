import sys

from pathlib import Path

import click

from tokenstream.__version__ import __version__
from tokenstream.config import SCHEMA, ConfigError
from tokenstream.errors import TokenStreamError
from tokenstream.format import indent, type_name
from tokenstream.main import (
    FileEvalError,
    create_config,
    load_rules,
    set_verbosity,
    tokenize_file
)

FILE = click.Path(exists=True, file_okay=True, dir_okay=False,
                  readable=True, path_type=Path)


@click.group()
@click.version_option(__version__)
def main():
    pass


@main.command("tokenize")
@click.argument("source", required=True, type=FILE)
@click.option("-r", "--rules", required=True, type=FILE,
              help="python file defining the RULES list")
@click.option("-c", "--config", "config_file", type=FILE,
              help="python file assigning options")
@click.option("-d", "--define", multiple=True, metavar="NAME=VALUE",
              help="override an option")
@click.option("-v", "--verbose", count=True)
def tokenize_command(source, rules, config_file, define, verbose):
    set_verbosity(verbose)
    config = create_config(config_file, define)
    stream = tokenize_file(source, load_rules(rules), config)

    for token in stream:
        if config.color:
            text = str(token)
        else:
            text = f"({type_name(token.type)}: {token.content})"
        click.echo(f"{token.line}:{token.column}\t{text}")


@main.command("options")
def options_command():
    for name, option in SCHEMA.items():
        click.echo(f"{name} ({option.type_name}, default {option.default!r})")
        click.echo(indent(option.help))


def run():
    try:
        main()
    except (TokenStreamError, ConfigError, FileEvalError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
