from __future__ import annotations


class Token(str):
    """A line or a word produced by the tokenizer.

    Behaves as the decoded string; `start` and `end` are byte offsets
    of the token within the scanned data, `index` is its ordinal.
    """

    def __new__(cls,
                value: str,
                index: int,
                start: int,
                end: int):
        self = super().__new__(cls, value)
        self.value = value
        self.index = index
        self.start = start
        self.end = end
        return self

    def __repr__(self):
        return f"Token({self.value!r}, {self.index}, {self.start}, {self.end})"

    def __reduce__(self):
        return (Token, (self.value, self.index, self.start, self.end))
