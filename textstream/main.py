import sys
import logging

from pathlib import Path
from typing import Iterable, Optional

from textstream.adapters import TextFile, TextStream
from textstream.config import Config, default_config, read_file
from textstream.source import TextSource

logging.basicConfig(format="{name}: {message}", style="{")
logger = logging.getLogger("textstream")

STDIN = "-"


def load_config(config_file: Optional[Path] = None,
                defines: Iterable[str] = ()) -> Config:
    """Build the reader config from an optional file and NAME=VALUE strings.

    Values from `defines` are layered over the values from the file.
    """
    if config_file is not None:
        config = read_file(config_file)
        logger.info("config file %s", config_file)
    else:
        config = default_config()
    defines = list(defines)
    if defines:
        config.parse(defines)
        config.validate()
    return config


def open_source(path: str, config: Config) -> TextSource:
    """Open `path` as a TextFile, or wrap standard input for "-"."""
    if path == STDIN:
        logger.info("reading standard input")
        return TextStream(sys.stdin.buffer, config, closefd=False)
    logger.info("opening %s", path)
    return TextFile.open(path, "rb", config)
