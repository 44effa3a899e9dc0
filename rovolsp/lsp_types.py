"""Minimal Language Server Protocol data types used by the code actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CodeActionKind(str, Enum):
    """Kinds of code actions offered to the editor."""

    QUICKFIX = "quickfix"
    REFACTOR = "refactor"


@dataclass(frozen=True)
class Position:
    """A zero-based line and character offset in a document."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """A span between two positions in a document."""

    start: Position
    end: Position

    @classmethod
    def insertion(cls, line: int) -> Range:
        """Return an empty range at the start of ``line``."""
        point = Position(line, 0)
        return cls(point, point)


@dataclass(frozen=True)
class TextEdit:
    """Replacement of the text in ``range`` by ``new_text``."""

    range: Range
    new_text: str


@dataclass
class WorkspaceEdit:
    """Text edits grouped by document URI."""

    changes: dict[str, list[TextEdit]] = field(default_factory=dict)

    @classmethod
    def single(cls, uri: str, edit: TextEdit) -> WorkspaceEdit:
        """Return a workspace edit holding one edit for one document."""
        return cls({uri: [edit]})


@dataclass
class CodeAction:
    """A titled action that applies a workspace edit."""

    title: str
    kind: CodeActionKind | None = None
    edit: WorkspaceEdit | None = None
    is_preferred: bool | None = None

    def edits_for(self, uri: str) -> list[TextEdit]:
        """Return the edits this action makes to the document at ``uri``."""
        if self.edit is None:
            return []
        return list(self.edit.changes.get(uri, []))


@dataclass(frozen=True)
class Diagnostic:
    """A problem reported for a range of a document."""

    range: Range
    message: str