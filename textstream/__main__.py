import logging

from itertools import islice
from pathlib import Path

import click

from textstream.__version__ import __version__
from textstream.adapters import TextFile
from textstream.main import logger, load_config, open_source
from textstream.config import ConfigError
from textstream.errors import TextStreamError
from textstream.tokenizer import SplitRule

ERRORS = (TextStreamError, ConfigError, UnicodeDecodeError, OSError)

_shared_options = [
    click.option("-d", "--define", multiple=True, metavar="NAME=VALUE",
                 help="override a reader option"),
    click.option("-c", "--config", "config_file", metavar="FILE",
                 type=click.Path(exists=True, dir_okay=False,
                                 path_type=Path),
                 help="python file with reader options"),
    click.option("-v", "--verbose", count=True),
]


def shared_options(fn):
    for option in reversed(_shared_options):
        fn = option(fn)
    return fn


def _setup(define, config_file, verbose):
    if verbose > 1:
        logger.setLevel(logging.DEBUG)
    elif verbose:
        logger.setLevel(logging.INFO)
    return load_config(config_file, define)


def _fail(e: Exception):
    raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="textstream")
def main():
    pass


def _tokens(file, rule, head, define, config_file, verbose):
    try:
        config = _setup(define, config_file, verbose)
        with open_source(file, config) as source:
            if rule is SplitRule.LINES:
                tokens = source.read_lines()
            else:
                tokens = source.read_words()
            if head is not None:
                tokens = islice(tokens, head)
            for token in tokens:
                click.echo(token)
    except ERRORS as e:
        _fail(e)


@main.command()
@click.argument("file", default="-")
@click.option("-n", "--head", type=click.IntRange(min=0), default=None,
              help="stop after N lines")
@shared_options
def lines(file, head, define, config_file, verbose):
    """Print the lines of FILE."""
    _tokens(file, SplitRule.LINES, head, define, config_file, verbose)


@main.command()
@click.argument("file", default="-")
@click.option("-n", "--head", type=click.IntRange(min=0), default=None,
              help="stop after N words")
@shared_options
def words(file, head, define, config_file, verbose):
    """Print the words of FILE, one per line."""
    _tokens(file, SplitRule.WORDS, head, define, config_file, verbose)


@main.command("int")
@click.argument("file", default="-")
@shared_options
def int_(file, define, config_file, verbose):
    """Print the content of FILE parsed as an integer."""
    try:
        config = _setup(define, config_file, verbose)
        with open_source(file, config) as source:
            click.echo(source.parse_int())
    except ERRORS as e:
        _fail(e)


@main.command()
@click.argument("file", default="-")
@shared_options
def trim(file, define, config_file, verbose):
    """Print FILE without leading and trailing whitespace."""
    try:
        config = _setup(define, config_file, verbose)
        with open_source(file, config) as source:
            click.echo(source.trimmed_string())
    except ERRORS as e:
        _fail(e)


@main.command()
@click.argument("file", default="-")
@shared_options
def cat(file, define, config_file, verbose):
    """Print FILE unchanged."""
    try:
        config = _setup(define, config_file, verbose)
        with open_source(file, config) as source:
            click.echo(source.string(), nl=False)
    except ERRORS as e:
        _fail(e)


@main.command()
@click.argument("file")
@click.argument("text", nargs=-1)
@shared_options
def append(file, text, define, config_file, verbose):
    """Append TEXT to FILE, one argument per line."""
    try:
        config = _setup(define, config_file, verbose)
        with TextFile.open(file, "ab", config) as source:
            for item in text:
                source.write_string(item)
                source.write_rune("\n")
    except ERRORS as e:
        _fail(e)


if __name__ == "__main__":
    main()
