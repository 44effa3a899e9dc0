"""Code actions for ``#[rovo]`` handlers: doc sections, metadata and derives."""

from __future__ import annotations

import re

from .context import (
    find_function_for_rovo_init,
    find_rovo_function_context,
    find_struct_context,
)
from .lsp_types import (
    CodeAction,
    CodeActionKind,
    Diagnostic,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)
from .sections import (
    check_blank_line_requirements,
    find_metadata_insertion_point,
    find_section,
    find_section_insertion_point,
)

_SUGGESTED_STATUSES = (200, 201, 400, 404, 500)
_REST_RESPONSES = (
    "200: Json<T> - Success",
    "400: Json<Error> - Bad request",
    "404: Json<Error> - Not found",
    "500: Json<Error> - Internal server error",
)
_DERIVE_LIST = re.compile(r"\s*derive\s*\((?P<items>.*)\)\s*", re.DOTALL)
_PATH = re.compile(r"(::\s*)?[A-Za-z_]\w*(\s*::\s*[A-Za-z_]\w*)*")
_NEW_DERIVE = "#[derive(JsonSchema)]"


def _lines(content: str) -> list[str]:
    """Split text into lines without a trailing empty line, dropping ``\\r`` endings."""
    if not content:
        return []
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _doc_text(line: str) -> str:
    while line.startswith("///"):
        line = line[3:]
    return line.strip()


def _refactor(title: str, uri: str, edit: TextEdit) -> CodeAction:
    return CodeAction(
        title=title,
        kind=CodeActionKind.REFACTOR,
        edit=WorkspaceEdit.single(uri, edit),
    )


def _insert(uri: str, title: str, line: int, text: str) -> CodeAction:
    return _refactor(title, uri, TextEdit(Range.insertion(line), text))


def _derive_items(meta: str) -> list[str] | None:
    """Return the derive paths in ``derive(...)``, or ``None`` if it is not one."""
    match = _DERIVE_LIST.fullmatch(meta)
    if match is None:
        return None
    body = match.group("items").strip()
    if not body:
        return []
    items = [item.strip() for item in body.split(",")]
    if items[-1] == "":
        items.pop()
    if not all(_PATH.fullmatch(item) for item in items):
        return None
    return [re.sub(r"\s+", "", item) for item in items]


def add_jsonschema_to_derive(line: str) -> str:
    """Return ``line`` with ``JsonSchema`` added first to its ``#[derive(...)]``.

    A line that is not a well-formed derive attribute is replaced by a fresh
    ``#[derive(JsonSchema)]`` with the same indentation.
    """
    start = line.find("#[")
    if start < 0:
        return _NEW_DERIVE
    indent = " " * (len(line) - len(line.lstrip()))
    after = start + 2
    end = line.find("]", after)
    if end < 0:
        return indent + _NEW_DERIVE
    items = _derive_items(line[after:end])
    if items is None:
        return indent + _NEW_DERIVE
    return f"{indent}#[derive({', '.join(['JsonSchema', *items])})]"


def _jsonschema_action(lines: list[str], struct_ctx, uri: str) -> CodeAction:
    if struct_ctx.derive_line is not None:
        line_no = struct_ctx.derive_line
        existing = lines[line_no] if line_no < len(lines) else ""
        edit = TextEdit(
            Range(Position(line_no, 0), Position(line_no, len(existing))),
            add_jsonschema_to_derive(existing),
        )
        return _refactor("Add JsonSchema to derive", uri, edit)
    return _insert(uri, "Add JsonSchema derive", struct_ctx.struct_line, _NEW_DERIVE + "\n")


def _new_section_text(lines: list[str], insert_line: int, header: str, body: str) -> str:
    needs_prefix, needs_suffix = check_blank_line_requirements(lines, insert_line)
    text = f"/// # {header}\n///\n{body}\n"
    if needs_prefix:
        text = "///\n" + text
    if needs_suffix:
        text += "///\n"
    return text


def _section_action(
    content: str, title: str, section_name: str, entry: str, doc_start: int, doc_end: int, uri: str
) -> CodeAction:
    """Append ``entry`` to a section, creating the section in order when missing."""
    section = find_section(content, section_name, doc_start, doc_end)
    if section is not None:
        return _insert(uri, title, section.last_content_line + 1, f"/// {entry}\n")
    insert_line = find_section_insertion_point(content, section_name, doc_start, doc_end)
    text = _new_section_text(_lines(content), insert_line, section_name, f"/// {entry}")
    return _insert(uri, title, insert_line, text)


def _metadata_action(
    content: str, title: str, annotation: str, has_metadata: bool, doc_start: int, doc_end: int, uri: str
) -> CodeAction:
    """Add a metadata annotation in its place, creating ``# Metadata`` when missing."""
    if has_metadata:
        section = find_section(content, "Metadata", doc_start, doc_end)
        if section is None:
            return _section_action(content, title, "Metadata", annotation, doc_start, doc_end, uri)
        insert_line = find_metadata_insertion_point(
            content, annotation, section.start, section.last_content_line
        )
        return _insert(uri, title, insert_line, f"/// {annotation}\n")
    insert_line = find_section_insertion_point(content, "Metadata", doc_start, doc_end)
    text = _new_section_text(_lines(content), insert_line, "Metadata", f"/// {annotation}")
    return _insert(uri, title, insert_line, text)


def _rest_responses_action(content: str, doc_start: int, doc_end: int, uri: str) -> CodeAction:
    title = "Add common REST responses"
    entries = "\n".join(f"/// {response}" for response in _REST_RESPONSES)
    section = find_section(content, "Responses", doc_start, doc_end)
    if section is not None:
        return _insert(uri, title, section.last_content_line + 1, entries + "\n")
    insert_line = find_section_insertion_point(content, "Responses", doc_start, doc_end)
    text = _new_section_text(_lines(content), insert_line, "Responses", entries)
    return _insert(uri, title, insert_line, text)


def _doc_block_start(lines: list[str], end: int) -> int:
    start = end
    while start > 0 and start - 1 < len(lines) and lines[start - 1].lstrip().startswith("///"):
        start -= 1
    return start


def _block_texts(lines: list[str], start: int, end: int) -> list[str]:
    return [_doc_text(line) for line in lines[start:end]]


def get_code_actions(content: str, range: Range, uri: str) -> list[CodeAction]:
    """Return the refactorings available at the start of ``range``."""
    actions: list[CodeAction] = []
    start_line = range.start.line
    lines = _lines(content)
    if start_line >= len(lines):
        return actions

    context = find_rovo_function_context(content, start_line)

    struct_ctx = find_struct_context(content, start_line)
    if struct_ctx is not None and not struct_ctx.has_jsonschema:
        actions.append(_jsonschema_action(lines, struct_ctx, uri))

    if not context.is_near_rovo:
        init = find_function_for_rovo_init(content, start_line)
        if init is not None:
            _, attr_line = init
            actions.append(_insert(uri, "Add #[rovo] macro", attr_line, "#[rovo]\n"))
        return actions

    insert_line = context.rovo_line if context.rovo_line is not None else start_line
    doc_start = _doc_block_start(lines, insert_line)
    texts = _block_texts(lines, doc_start, insert_line)

    actions.append(
        _section_action(
            content, "Add response", "Responses", "200: Json<T> - Description",
            doc_start, insert_line, uri,
        )
    )
    actions.append(
        _section_action(
            content, "Add example", "Examples", "200: T::default()", doc_start, insert_line, uri
        )
    )

    has_metadata = find_section(content, "Metadata", doc_start, insert_line) is not None
    metadata = [("Add @tag", "@tag TAG_NAME"), ("Add @security", "@security SCHEME")]
    if not any(text.startswith("@id") for text in texts):
        metadata.append(("Add @id", "@id OPERATION_ID"))
    if not any(text.startswith("@hidden") for text in texts):
        metadata.append(("Add @hidden", "@hidden"))
    for title, annotation in metadata:
        actions.append(
            _metadata_action(content, title, annotation, has_metadata, doc_start, insert_line, uri)
        )

    if "# Responses" not in texts:
        actions.append(_rest_responses_action(content, doc_start, insert_line, uri))

    return actions


def get_diagnostic_code_actions(content: str, diagnostic: Diagnostic, uri: str) -> list[CodeAction]:
    """Return quick fixes for a diagnostic, such as replacing an invalid status code."""
    if "Invalid HTTP status" not in diagnostic.message:
        return []
    if diagnostic.range.start.line >= len(_lines(content)):
        return []
    return [
        CodeAction(
            title=f"Change to {status}",
            kind=CodeActionKind.QUICKFIX,
            edit=WorkspaceEdit.single(uri, TextEdit(diagnostic.range, str(status))),
            is_preferred=status == 200,
        )
        for status in _SUGGESTED_STATUSES
    ]