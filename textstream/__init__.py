from textstream.__version__ import __version__
from textstream.adapters import NullDevice, TextBuffer, TextFile, TextStream
from textstream.config import Config, ConfigError, default_config
from textstream.errors import (
    TextStreamError,
    EndOfData,
    ParseError,
    ClosedResource,
    RewindFailure,
    TokenTooLong
)
from textstream.source import StreamingMode, TextSource
from textstream.token import Token
from textstream.tokenizer import SplitRule, Tokenizer

__all__ = [
    "__version__",
    "NullDevice",
    "TextBuffer",
    "TextFile",
    "TextStream",
    "Config",
    "ConfigError",
    "default_config",
    "TextStreamError",
    "EndOfData",
    "ParseError",
    "ClosedResource",
    "RewindFailure",
    "TokenTooLong",
    "StreamingMode",
    "TextSource",
    "Token",
    "SplitRule",
    "Tokenizer",
]
