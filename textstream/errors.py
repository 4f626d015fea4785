class TextStreamError(Exception):
    pass


class EndOfData(TextStreamError, EOFError):
    """No more tokens or bytes are available."""

    def __init__(self, what: str = "end of data"):
        super().__init__(what)


class ParseError(TextStreamError, ValueError):
    """Text could not be converted to the requested value."""

    def __init__(self, text: str, what: str = "not a base-10 integer"):
        super().__init__(f"{what}: {text!r}")
        self.text = text
        self.what = what


class ClosedResource(TextStreamError, ValueError):
    """Operation on a closed source."""

    def __init__(self, name: str = "<source>"):
        super().__init__(f"I/O operation on closed source: {name}")
        self.name = name


class RewindFailure(TextStreamError, OSError):
    """Source could not be repositioned to its start."""

    def __init__(self, name: str, reason: BaseException | None = None):
        msg = f"unable to rewind {name}"
        if reason is not None:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.name = name


class TokenTooLong(TextStreamError):
    def __init__(self, limit: int):
        super().__init__(f"token exceeds {limit} bytes")
        self.limit = limit
