"""Locate the function or struct surrounding a cursor line in Rust source text."""

from __future__ import annotations

from dataclasses import dataclass

_ATTRIBUTE_LOOKAHEAD = 5
_SIGNATURE_LOOKBEHIND = 5
_DOC_BLOCK_LOOKAHEAD = 20
_ATTRIBUTE_LOOKBEHIND = 10
_BRACE_LOOKAHEAD = 3


def _lines(content: str) -> list[str]:
    """Split text into lines without a trailing empty line, dropping ``\\r`` endings."""
    if not content:
        return []
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _line_at(lines: list[str], index: int) -> str:
    return lines[index] if 0 <= index < len(lines) else ""


def _is_rovo_attribute(line: str) -> bool:
    return line.strip().startswith("#[") and "rovo" in line


def _is_fn_signature(line: str) -> bool:
    return "fn " in line and not line.strip().startswith("//")


def _has_opening_brace(lines: list[str], fn_line: int, current_line: int) -> bool:
    """Whether a ``{`` appears from ``fn_line`` up to a few lines past ``current_line``."""
    last = min(current_line + _BRACE_LOOKAHEAD, max(len(lines) - 1, 0))
    return any("{" in _line_at(lines, i) for i in range(fn_line, last + 1))


def _rovo_attribute_above(lines: list[str], fn_line: int) -> int | None:
    """Return the line of a ``#[rovo]`` attribute shortly above ``fn_line``."""
    for i in reversed(range(max(fn_line - _ATTRIBUTE_LOOKBEHIND, 0), fn_line)):
        line = _line_at(lines, i)
        if _is_rovo_attribute(line):
            return i
        if "fn " in line:
            break
    return None


@dataclass(frozen=True)
class RovoContext:
    """Where the cursor stands relative to a ``#[rovo]`` function."""

    is_near_rovo: bool
    rovo_line: int | None = None
    fn_line: int | None = None


_NOT_NEAR = RovoContext(False)


@dataclass(frozen=True)
class StructContext:
    """A struct or enum enclosing the cursor and its derive attribute."""

    struct_line: int
    derive_line: int | None
    has_jsonschema: bool

    @property
    def has_derive(self) -> bool:
        """Whether a ``#[derive(...)]`` attribute sits above the definition."""
        return self.derive_line is not None


def _context_on_line(lines: list[str], current_line: int) -> RovoContext | None:
    """The cursor is on the ``#[rovo]`` line or on the signature below it."""
    if current_line >= len(lines):
        return None
    line = lines[current_line]
    trimmed = line.strip()

    if trimmed.startswith("#[") and "rovo" in line:
        end = min(current_line + _ATTRIBUTE_LOOKAHEAD, len(lines))
        for i in range(current_line + 1, end):
            if _is_fn_signature(lines[i]):
                return RovoContext(True, current_line, i)
        return RovoContext(True, current_line, None)

    if "fn " in trimmed and not trimmed.startswith("//"):
        start = max(current_line - _SIGNATURE_LOOKBEHIND, 0)
        for i in reversed(range(start, current_line)):
            if _is_rovo_attribute(lines[i]):
                return RovoContext(True, i, current_line)
    return None


def _context_in_doc_comment(lines: list[str], current_line: int) -> RovoContext | None:
    """The cursor is in a doc comment block that leads to a ``#[rovo]`` function."""
    if current_line >= len(lines) or not lines[current_line].strip().startswith("///"):
        return None

    found_rovo: int | None = None
    found_fn: int | None = None
    for i in range(current_line, min(current_line + _DOC_BLOCK_LOOKAHEAD, len(lines))):
        line = lines[i]
        trimmed = line.strip()

        if trimmed.startswith("#[") and "rovo" in line:
            found_rovo = i

        if "fn " in trimmed and not trimmed.startswith("//"):
            if found_rovo is not None:
                found_fn = i
            break

        if (
            not trimmed.startswith("///")
            and not trimmed.startswith("#[")
            and trimmed
            and "fn " not in trimmed
        ):
            break

        if not trimmed and i > current_line and i + 1 < len(lines):
            following = lines[i + 1].strip()
            if not following.startswith("///") and not following.startswith("#["):
                break

    if found_rovo is not None and found_fn is not None:
        return RovoContext(True, found_rovo, found_fn)
    return None


def _context_in_body(lines: list[str], current_line: int) -> RovoContext:
    """The cursor is inside the body of a ``#[rovo]`` function."""
    brace_count = 0
    fn_line: int | None = None
    for i in range(current_line, -1, -1):
        line = _line_at(lines, i)
        brace_count += line.count("}")
        brace_count -= line.count("{")
        if brace_count > 0:
            return _NOT_NEAR
        if _is_fn_signature(line):
            fn_line = i
            break

    if fn_line is None or not _has_opening_brace(lines, fn_line, current_line):
        return _NOT_NEAR

    rovo_line = _rovo_attribute_above(lines, fn_line)
    if rovo_line is None:
        return _NOT_NEAR
    return RovoContext(True, rovo_line, fn_line)


def find_rovo_function_context(content: str, current_line: int) -> RovoContext:
    """Find whether ``current_line`` is on, above or inside a ``#[rovo]`` function."""
    lines = _lines(content)
    return (
        _context_on_line(lines, current_line)
        or _context_in_doc_comment(lines, current_line)
        or _context_in_body(lines, current_line)
    )


def find_function_for_rovo_init(content: str, current_line: int) -> tuple[int, int] | None:
    """Find a function lacking ``#[rovo]`` at ``current_line``.

    Returns the function's line and the line where the attribute is to be inserted.
    """
    lines = _lines(content)
    if current_line >= len(lines):
        return None
    current = lines[current_line]
    trimmed = current.strip()

    if not trimmed or trimmed.startswith("//") or trimmed.startswith("#["):
        return None

    is_signature = "fn " in trimmed
    is_indented = current.startswith(" ") or current.startswith("\t")
    if not is_signature and not is_indented:
        return None

    if is_signature:
        fn_line = current_line
    else:
        for i in reversed(range(current_line)):
            line = lines[i]
            if _is_fn_signature(line):
                fn_line = i
                break
            if line.strip() == "}":
                return None
        else:
            return None

    if not _has_opening_brace(lines, fn_line, current_line):
        return None
    if _rovo_attribute_above(lines, fn_line) is not None:
        return None
    return fn_line, fn_line


def find_struct_context(content: str, current_line: int) -> StructContext | None:
    """Find the struct or enum whose body contains ``current_line``."""
    lines = _lines(content)
    if current_line >= len(lines):
        return None

    struct_line: int | None = None
    for i in range(current_line, -1, -1):
        line = lines[i]
        if ("struct " in line or "enum " in line) and not line.strip().startswith("//"):
            struct_line = i
            break
    if struct_line is None:
        return None

    inside = any(
        "{" in lines[i] and current_line >= i
        for i in range(struct_line, min(struct_line + 2, len(lines)))
    )
    if not inside:
        return None

    derive_line: int | None = None
    has_jsonschema = False
    for i in reversed(range(max(struct_line - _ATTRIBUTE_LOOKBEHIND, 0), struct_line)):
        trimmed = lines[i].strip()
        if trimmed.startswith("#[derive("):
            derive_line = i
            has_jsonschema = "JsonSchema" in lines[i]
            break
        if trimmed and not trimmed.startswith("#[") and not trimmed.startswith("///"):
            break

    return StructContext(struct_line, derive_line, has_jsonschema)