"""Find and order the documentation sections of a ``#[rovo]`` doc comment."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

SECTION_ORDER = ("Responses", "Examples", "Metadata")
ANNOTATION_ORDER = ("id", "tag", "security", "hidden")

_DOC_PREFIX = "///"
_IGNORE_MARKER = "@rovo-ignore"


def _lines(content: str) -> list[str]:
    """Split text into lines without a trailing empty line, dropping ``\\r`` endings."""
    if not content:
        return []
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _doc_text(line: str) -> str:
    """Remove every leading ``///`` from ``line`` and strip surrounding whitespace."""
    while line.startswith(_DOC_PREFIX):
        line = line[len(_DOC_PREFIX):]
    return line.strip()


def _window(lines: list[str], start: int, end: int) -> list[tuple[int, str]]:
    """Numbered lines from ``start`` up to ``end`` (exclusive) that exist."""
    return [(i, lines[i]) for i in range(max(start, 0), min(end, len(lines)))]


@dataclass(frozen=True)
class Section:
    """A documentation section: its header line and its last line with content."""

    start: int
    last_content_line: int


def find_effective_doc_end(content: str, doc_start: int, doc_end: int) -> int:
    """Return the line of the first ``@rovo-ignore`` in the block, or ``doc_end``."""
    for i, line in _window(_lines(content), doc_start, doc_end):
        if _doc_text(line).startswith(_IGNORE_MARKER):
            return i
    return doc_end


def check_blank_line_requirements(lines: Sequence[str], insert_line: int) -> tuple[bool, bool]:
    """Return whether blank doc lines are needed before and after an inserted section."""
    if 0 < insert_line <= len(lines):
        prev = lines[insert_line - 1].strip()
        needs_prefix = prev != _DOC_PREFIX and bool(prev)
    else:
        needs_prefix = True

    if insert_line < len(lines):
        following = lines[insert_line].strip()
        needs_suffix = bool(following) and following != _DOC_PREFIX
    else:
        needs_suffix = False

    return needs_prefix, needs_suffix


def find_section(content: str, section_name: str, doc_start: int, doc_end: int) -> Section | None:
    """Find ``# <section_name>`` in the doc block, stopping at ``@rovo-ignore``."""
    lines = _lines(content)
    header = f"# {section_name}"
    effective_end = find_effective_doc_end(content, doc_start, doc_end)

    start = next(
        (i for i, line in _window(lines, doc_start, effective_end) if _doc_text(line) == header),
        None,
    )
    if start is None:
        return None

    last_content = start
    for i, line in _window(lines, start + 1, effective_end):
        text = _doc_text(line)
        if text.startswith("# ") or not line.lstrip().startswith(_DOC_PREFIX):
            break
        if text:
            last_content = i
    return Section(start, last_content)


def find_section_insertion_point(
    content: str, section_name: str, doc_start: int, doc_end: int
) -> int:
    """Return the line where a new section goes to keep Responses, Examples, Metadata order."""
    lines = _lines(content)
    effective_end = find_effective_doc_end(content, doc_start, doc_end)

    if section_name not in SECTION_ORDER:
        return effective_end
    target = SECTION_ORDER.index(section_name)

    positions: list[tuple[int, int]] = []
    for i, line in _window(lines, doc_start, effective_end):
        text = _doc_text(line)
        if text.startswith("# "):
            name = text.lstrip("#").lstrip(" ").strip() if text.startswith("# ") else text
            name = _strip_header_marks(text)
            if name in SECTION_ORDER:
                positions.append((SECTION_ORDER.index(name), i))

    if not positions:
        return effective_end

    for order, line_number in positions:
        if order > target:
            return line_number

    last_order = positions[-1][0]
    section = find_section(content, SECTION_ORDER[last_order], doc_start, effective_end)
    if section is not None:
        return section.last_content_line + 1
    return effective_end


def _strip_header_marks(text: str) -> str:
    """Remove every leading ``"# "`` from a header line and strip whitespace."""
    while text.startswith("# "):
        text = text[2:]
    return text.strip()


def annotation_type(annotation: str) -> str:
    """Classify a metadata annotation as ``id``, ``tag``, ``security``, ``hidden`` or ``unknown``."""
    trimmed = annotation.strip()
    for kind in ANNOTATION_ORDER:
        if trimmed.startswith(f"@{kind}"):
            return kind
    return "unknown"


def find_metadata_insertion_point(
    content: str, annotation: str, metadata_start: int, metadata_end: int
) -> int:
    """Return the line where ``annotation`` goes in the Metadata section.

    Annotations are kept in the order ``@id``, ``@tag``, ``@security``, ``@hidden``,
    with annotations of one kind grouped together.
    """
    lines = _lines(content)
    kind = annotation_type(annotation)
    if kind not in ANNOTATION_ORDER:
        return metadata_end
    target = ANNOTATION_ORDER.index(kind)

    body = _window(lines, metadata_start + 1, metadata_end + 1)
    positions: list[tuple[int, int]] = []
    for i, line in body:
        text = _doc_text(line)
        if not text or text.startswith("# "):
            continue
        line_kind = annotation_type(text)
        if line_kind in ANNOTATION_ORDER:
            positions.append((ANNOTATION_ORDER.index(line_kind), i))

    if not positions:
        for i, line in body:
            if _doc_text(line):
                return i
        return metadata_start + 1

    last_same: int | None = None
    for order, line_number in positions:
        if order == target:
            last_same = line_number
        elif order > target:
            return last_same + 1 if last_same is not None else line_number

    anchor = last_same if last_same is not None else positions[-1][1]
    return anchor + 1