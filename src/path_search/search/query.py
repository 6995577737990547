"""Retrieval request model.

A retrieval request is a flat list of clauses combined with OR
semantics: every satisfied clause adds to a document's score, and a
document that satisfies no clause is not a hit.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class MatchKind(str, Enum):
    """How a clause's text is matched against indexed terms."""

    SUBSTRING = "substring"  # exact equality with an indexed gram
    FUZZY = "fuzzy"  # bounded edit distance


@dataclass(frozen=True)
class Clause:
    """One should-match condition on a single field."""

    field: str
    text: str
    kind: MatchKind = MatchKind.SUBSTRING
    max_edits: int = 0


@dataclass
class RetrievalRequest:
    """OR-combined set of clauses."""

    clauses: list[Clause] = field(default_factory=list)

    def add(self, clause: Clause) -> "RetrievalRequest":
        self.clauses.append(clause)
        return self

    def term(self, field_name: str, text: str) -> "RetrievalRequest":
        """Add an exact-term clause."""
        return self.add(Clause(field_name, text, MatchKind.SUBSTRING))

    def fuzzy(self, field_name: str, text: str, max_edits: int) -> "RetrievalRequest":
        """Add a bounded edit-distance clause."""
        return self.add(Clause(field_name, text, MatchKind.FUZZY, max_edits))

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)
