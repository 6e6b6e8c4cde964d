"""
Line tokenizer.

split(line) walks the line once and yields (token, Span) pairs on demand.
It is a two-state scanner:

- between words: whitespace is skipped; a quote character (' or ") opens a
  quoted word whose token starts after the quote; anything else opens a plain word.
- inside a word: a plain word ends at whitespace; a quoted word ends only at the
  matching quote of the same character (the quote itself is not part of the token).

A word still open when the line ends is emitted up to the end of the line, so an
unterminated quote degrades to a partial word instead of an error.

Tokens are slices of the original line and every Span keeps the offsets the slice
came from, which is what fault messages point at.
"""
from typing import NamedTuple


class Span(NamedTuple):
    """
    Location of a token inside the line it was read from.

    begin/end are character offsets into source (end exclusive).
    """
    source: str
    begin: int
    end: int

    @property
    def text(self):
        return self.source[self.begin:self.end]

    def __str__(self):
        return self.text


def split(line, /):
    """
    Lazily split a line into (token, Span) pairs, honoring single and double quotes.

    Examples
    - 'one "two; two and half" three' → "one", "two; two and half", "three"
    - 'one two "three'                → "one", "two", "three"
    """
    if not isinstance(line, str):
        raise TypeError("split() argument must be a string")

    start = None  # None while between words
    quote = None

    for index, char in enumerate(line):
        if start is None:
            if char.isspace():
                continue
            if char in ("'", '"'):
                start, quote = index + 1, char
            else:
                start, quote = index, None
        elif quote is not None:
            if char == quote:
                yield line[start:index], Span(line, start, index)
                start = quote = None
        elif char.isspace():
            yield line[start:index], Span(line, start, index)
            start = None

    if start is not None:
        yield line[start:], Span(line, start, len(line))


__all__ = (
    "Span",
    "split",
)
