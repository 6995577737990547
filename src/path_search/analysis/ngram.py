"""N-gram generation for substring and abbreviation matching."""

from collections.abc import Iterable, Iterator

from path_search.analysis.tokens import Token

DEFAULT_MIN_GRAM = 2
DEFAULT_MAX_GRAM = 10


def ngrams(term: str, min_gram: int = DEFAULT_MIN_GRAM, max_gram: int = DEFAULT_MAX_GRAM) -> list[str]:
    """Return every contiguous substring of ``term`` within the gram range.

    Grams are ordered by length, then by offset. A term shorter than
    ``min_gram`` is returned whole as its only gram.

    >>> ngrams("test")
    ['te', 'es', 'st', 'tes', 'est', 'test']
    """
    if not term:
        return []
    length = len(term)
    if length < min_gram:
        return [term]
    grams = []
    for size in range(max(min_gram, 1), min(max_gram, length) + 1):
        for start in range(length - size + 1):
            grams.append(term[start : start + size])
    return grams


class NGramFilter:
    """Replace each token with its n-grams."""

    def __init__(self, min_gram: int = DEFAULT_MIN_GRAM, max_gram: int = DEFAULT_MAX_GRAM) -> None:
        if max_gram < min_gram:
            raise ValueError(f"max_gram ({max_gram}) must be >= min_gram ({min_gram})")
        if max_gram < 1:
            raise ValueError(f"max_gram must be positive, got {max_gram}")
        self.min_gram = min_gram
        self.max_gram = max_gram

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            increment = token.position_increment
            for gram in ngrams(token.term, self.min_gram, self.max_gram):
                yield Token(
                    term=gram,
                    position_increment=increment,
                    start_offset=token.start_offset,
                    end_offset=token.end_offset,
                )
                increment = 1
