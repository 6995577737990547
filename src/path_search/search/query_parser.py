"""Minimal query grammar for substring search.

The grammar only knows literal text: whitespace separates terms and a
backslash makes the following character literal. Operator characters of
the full query syntax (``+ - ! ( ) : ^ [ ] " { } ~ * ? | & /``) are not
supported and must be escaped; ``escape`` does that for arbitrary user
text.
"""

from path_search.analysis import Analyzer
from path_search.exceptions import QuerySyntaxError
from path_search.search.query import RetrievalRequest

ESCAPE_CHAR = "\\"
SPECIAL_CHARS = frozenset('\\+-!():^[]"{}~*?|&/')


def escape(text: str) -> str:
    """Escape every operator character so ``text`` parses literally."""
    return "".join(ESCAPE_CHAR + ch if ch in SPECIAL_CHARS else ch for ch in text)


def split_terms(text: str) -> list[str]:
    """Split escaped query text into unescaped literal terms.

    Raises:
        QuerySyntaxError: On an unescaped operator or a trailing backslash.
    """
    terms: list[str] = []
    current: list[str] = []
    chars = iter(enumerate(text))
    for position, ch in chars:
        if ch == ESCAPE_CHAR:
            escaped = next(chars, None)
            if escaped is None:
                raise QuerySyntaxError(
                    f"Dangling escape character at end of query: {text!r}"
                )
            current.append(escaped[1])
        elif ch.isspace():
            if current:
                terms.append("".join(current))
                current = []
        elif ch in SPECIAL_CHARS:
            raise QuerySyntaxError(
                f"Unsupported operator {ch!r} at position {position} in query {text!r}"
            )
        else:
            current.append(ch)
    if current:
        terms.append("".join(current))
    return terms


class QueryParser:
    """Parse literal query text into term clauses over one field.

    With ``split_on_whitespace`` off, the terms are rejoined with a
    single space and analyzed together, so analyzers that look at the
    whole text (such as concatenation) see the full query.
    """

    def __init__(
        self, default_field: str, analyzer: Analyzer, split_on_whitespace: bool = True
    ) -> None:
        self.default_field = default_field
        self.analyzer = analyzer
        self.split_on_whitespace = split_on_whitespace

    def parse(self, text: str) -> RetrievalRequest:
        """Analyze each term and add one clause per distinct analyzed term."""
        request = RetrievalRequest()
        seen: set[str] = set()
        terms = split_terms(text)
        if not self.split_on_whitespace and terms:
            terms = [" ".join(terms)]
        for term in terms:
            for analyzed in self.analyzer.analyze(term):
                if analyzed not in seen:
                    seen.add(analyzed)
                    request.term(self.default_field, analyzed)
        return request
