"""Tokens and token streams.

A token stream is a finite sequence of tokens produced by running one
input text through an analysis chain. Streams are restartable: every
iteration re-runs the chain from the original text, so reading a stream
twice always yields the same tokens.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """A single unit of analyzed text.

    Attributes:
        term: The token text.
        position_increment: Distance from the previously emitted token.
            1 means "next position"; larger values mean tokens were
            removed in between.
        start_offset: Start character offset in the source text.
        end_offset: End character offset in the source text.
    """

    term: str
    position_increment: int = 1
    start_offset: int = 0
    end_offset: int = 0


class TokenStream:
    """Restartable stream of tokens for one input text."""

    def __init__(self, source: Callable[[], Iterable[Token]]) -> None:
        self._source = source

    def __iter__(self) -> Iterator[Token]:
        return iter(self._source())

    def terms(self) -> list[str]:
        """Collect the term text of every token."""
        return collect_terms(self)


def collect_terms(tokens: Iterable[Token]) -> list[str]:
    """Drain a token sequence and return its terms in arrival order."""
    return [token.term for token in tokens]
