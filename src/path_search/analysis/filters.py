"""Token filters.

Each filter is a callable that takes an upstream token sequence and
yields a transformed one, so filters compose by plain nesting:
``concat(stop(tokenizer(text)))``.
"""

from collections.abc import Iterable, Iterator
from dataclasses import replace

from path_search.analysis.stopwords import ENGLISH_STOP_WORDS
from path_search.analysis.tokens import Token, collect_terms

DEFAULT_DELIMITER = " "


class LowerCaseFilter:
    """Lowercase every token."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            yield replace(token, term=token.term.lower())


class StopFilter:
    """Drop tokens whose lowercase form is a stop word.

    The position increments of removed tokens are carried over to the
    next surviving token, so positions still reflect the original text.
    """

    def __init__(self, stop_words: Iterable[str] | None = None) -> None:
        words = ENGLISH_STOP_WORDS if stop_words is None else stop_words
        self.stop_words = frozenset(word.lower() for word in words)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        skipped = 0
        for token in tokens:
            if token.term.lower() in self.stop_words:
                skipped += token.position_increment
                continue
            if skipped:
                token = replace(
                    token, position_increment=token.position_increment + skipped
                )
                skipped = 0
            yield token


class ConcatenationFilter:
    """Merge an entire token sequence into a single token.

    The upstream sequence is drained completely and the term texts are
    joined with ``delimiter`` in arrival order. An empty upstream
    sequence produces no token at all; otherwise exactly one token with
    position increment 1 is produced.
    """

    def __init__(self, delimiter: str | None = DEFAULT_DELIMITER) -> None:
        self.delimiter = DEFAULT_DELIMITER if delimiter is None else delimiter

    def reduce(self, tokens: Iterable[Token]) -> Token | None:
        """Fold a token sequence into one token, or None if it is empty."""
        collected = list(tokens)
        if not collected:
            return None
        return Token(
            term=self.delimiter.join(collect_terms(collected)),
            position_increment=1,
            start_offset=collected[0].start_offset,
            end_offset=collected[-1].end_offset,
        )

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        merged = self.reduce(tokens)
        if merged is not None:
            yield merged
