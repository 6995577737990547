"""Documents: how paths and titled texts are laid out for the index."""

from dataclasses import dataclass
from pathlib import Path

from path_search.exceptions import ConfigError, IndexingError
from path_search.search.engine import DocumentField, FieldKind

PATH_FIELD = "path"
CONTENT_FIELD = "content"
FILENAME_FIELD = "filename"

ID_FIELD = "id"
TITLE_FIELD = "title"
CONCATENATED_FIELD = "concatenated"


def extract_filename(path: str) -> str:
    """Return the part after the last '/', or the whole string.

    The whole string is also returned when it ends with '/', so the
    result is never empty for a non-empty path.
    """
    last_slash = path.rfind("/")
    if 0 <= last_slash < len(path) - 1:
        return path[last_slash + 1 :]
    return path


@dataclass(frozen=True)
class PathDocument:
    """One indexed path.

    ``path`` is stored verbatim and indexed as a single term; ``content``
    and ``filename`` are analyzed by the engine's analyzer.
    """

    path: str
    content: str
    filename: str

    @classmethod
    def from_path(cls, path: str) -> "PathDocument":
        if not path:
            raise IndexingError("Cannot index an empty path")
        return cls(path=path, content=path, filename=extract_filename(path))

    def to_fields(self) -> list[DocumentField]:
        return [
            DocumentField(PATH_FIELD, self.path, FieldKind.STRING, stored=True),
            DocumentField(CONTENT_FIELD, self.content, FieldKind.TEXT),
            DocumentField(FILENAME_FIELD, self.filename, FieldKind.TEXT),
        ]


@dataclass(frozen=True)
class TitledDocument:
    """A titled text document with a concatenated copy of its words.

    ``concatenated`` is the title and content joined by a space; indexed
    with the concatenation analyzer it becomes one term holding every
    non-stop word of the document.
    """

    doc_id: str
    title: str
    content: str

    @property
    def concatenated(self) -> str:
        return f"{self.title} {self.content}"

    def to_fields(self) -> list[DocumentField]:
        return [
            DocumentField(ID_FIELD, self.doc_id, FieldKind.STRING, stored=True),
            DocumentField(TITLE_FIELD, self.title, FieldKind.TEXT, stored=True),
            DocumentField(CONTENT_FIELD, self.content, FieldKind.TEXT, stored=True),
            DocumentField(CONCATENATED_FIELD, self.concatenated, FieldKind.TEXT, stored=True),
        ]


def read_paths_file(path: Path) -> list[str]:
    """Read one path per line, skipping blank lines and '#' comments."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise ConfigError(f"Cannot read paths file {path}: {e}") from e
    return [
        line.strip()
        for line in lines
        if line.strip() and not line.lstrip().startswith("#")
    ]
