from __future__ import annotations

import logging

from typing import TYPE_CHECKING, Iterator, Optional

from textstream.config import Config, default_config
from textstream.token import Token
from textstream.tokenizer import SplitRule, Tokenizer

if TYPE_CHECKING:
    from textstream.source import TextSource

logger = logging.getLogger("textstream.scanner")


def scan(source: TextSource,
         rule: SplitRule,
         config: Optional[Config] = None) -> Iterator[Token]:
    """Produce the tokens of `source` one at a time.

    Every call owns a new tokenizer. Nothing is read until the first
    token is requested. When the consumer stops before the end of data
    (breaks out of the loop, closes the generator or drops it), the
    read-ahead bytes that did not become tokens are given back to the
    source, so the next operation resumes right after the last token
    that was delivered.
    """
    if config is None:
        config = default_config()

    tokenizer = Tokenizer(source.read_chunk,
                          rule,
                          bufsize=config.bufsize,
                          max_token_size=config.max_token_size,
                          errors=config.errors)
    try:
        yield from tokenizer
    finally:
        leftover = tokenizer.leftover()
        if leftover and not source.closed:
            logger.debug("%s: scan stopped early, returning %d bytes",
                         source.name, len(leftover))
            source.unread(leftover)
