import pytest

from rovolsp.lsp_types import (
    CodeAction,
    CodeActionKind,
    Diagnostic,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)

URI = "file:///tmp/handlers.rs"


def test_insertion_range_is_empty_at_line_start():
    rng = Range.insertion(7)
    assert rng.start == rng.end
    assert rng.start == Position(7, 0)


def test_code_action_kind_round_trips_through_action():
    rng = Range(Position(2, 4), Position(2, 7))
    edit = TextEdit(rng, "200")
    action = CodeAction(
        "Change to 200",
        CodeActionKind("quickfix"),
        WorkspaceEdit.single(URI, edit),
    )
    assert action.kind is CodeActionKind.QUICKFIX
    assert action.edits_for(URI)[0].new_text == "200"
    assert CodeActionKind("refactor") is CodeActionKind.REFACTOR


def test_single_workspace_edit_holds_one_edit():
    edit = TextEdit(Range.insertion(3), "#[rovo]\n")
    ws = WorkspaceEdit.single(URI, edit)
    assert ws.changes == {URI: [edit]}


def test_edits_for_returns_edits_of_uri():
    edit = TextEdit(Range.insertion(1), "/// @tag x\n")
    action = CodeAction("Add @tag", CodeActionKind.REFACTOR, WorkspaceEdit.single(URI, edit))
    assert action.edits_for(URI) == [edit]
    assert action.edits_for("file:///other.rs") == []


def test_edits_for_without_edit_is_empty():
    action = CodeAction("Nothing")
    assert action.edits_for(URI) == []


def test_edits_for_returns_copy():
    edit = TextEdit(Range.insertion(0), "x")
    action = CodeAction("t", edit=WorkspaceEdit.single(URI, edit))
    action.edits_for(URI).clear()
    assert action.edits_for(URI) == [edit]


def test_positions_are_immutable_and_comparable():
    pos = Position(2, 5)
    assert pos == Position(2, 5)
    with pytest.raises(AttributeError):
        pos.line = 3  # type: ignore[misc]


def test_diagnostic_keeps_range_and_message():
    rng = Range(Position(4, 4), Position(4, 7))
    diag = Diagnostic(rng, "Invalid HTTP status code")
    assert diag.range.end.character - diag.range.start.character == 3
    assert "Invalid HTTP status" in diag.message