"""Tokenizers: turn raw text into an initial token sequence."""

import re
from collections.abc import Iterator

from path_search.analysis.tokens import Token

_WHITESPACE_RUN = re.compile(r"\S+")


class WhitespaceTokenizer:
    """Split text on runs of whitespace, preserving case."""

    def __call__(self, text: str) -> Iterator[Token]:
        for match in _WHITESPACE_RUN.finditer(text):
            yield Token(
                term=match.group(),
                start_offset=match.start(),
                end_offset=match.end(),
            )


class KeywordTokenizer:
    """Emit the whole text as a single token (nothing for empty text)."""

    def __call__(self, text: str) -> Iterator[Token]:
        if text:
            yield Token(term=text, start_offset=0, end_offset=len(text))
