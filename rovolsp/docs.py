"""Annotation, section and status-code documentation loaded from Markdown files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

_UNKNOWN_DOCUMENTATION = "Unknown annotation - check available annotations"
_UNKNOWN_SUMMARY = "Unknown annotation"
_NO_DESCRIPTION = "No description available"
_STATUS_CODE_NAME = re.compile(r"\+?[0-9]+")


def _lines(content: str) -> list[str]:
    """Split text into lines the way a line iterator does: no trailing empty line."""
    if not content:
        return []
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def extract_summary(content: str) -> str:
    """Return the first non-empty, non-heading line after the first line."""
    for line in _lines(content)[1:]:
        trimmed = line.strip()
        if trimmed and not trimmed.startswith("#"):
            return trimmed
    return _NO_DESCRIPTION


def format_status_code_info(content: str, code: int) -> str:
    """Format a status-code Markdown page as a bold title followed by its text."""
    lines = _lines(content)
    title = f"Status {code}"
    if lines:
        first = lines[0].strip()
        if first.startswith("#"):
            without_hash = first.lstrip("#").strip()
            code_str = str(code)
            if without_hash.startswith(code_str):
                title = without_hash[len(code_str):].strip()
            else:
                title = without_hash

    body = lines[1:]
    while body and not body[0].strip():
        body.pop(0)
    description = "\n".join(line.strip() for line in body)
    return f"**{code} {title}**\n\n{description}"


@dataclass
class DocLibrary:
    """Documentation texts keyed by annotation, section and status code."""

    annotations: dict[str, str] = field(default_factory=dict)
    sections: dict[str, str] = field(default_factory=dict)
    summaries: dict[str, str] = field(default_factory=dict)
    status_codes: dict[int, str] = field(default_factory=dict)

    def annotation_documentation(self, annotation: str) -> str:
        """Return the text for ``@name`` or ``section:name``."""
        if annotation in self.annotations:
            return self.annotations[annotation]
        if annotation in self.sections:
            return self.sections[annotation]
        return _UNKNOWN_DOCUMENTATION

    def annotation_summary(self, annotation: str) -> str:
        """Return the one-line summary of an annotation."""
        return self.summaries.get(annotation, _UNKNOWN_SUMMARY)

    def status_code_info(self, code: int) -> str | None:
        """Return the formatted description of a status code, if documented."""
        return self.status_codes.get(code)


def _markdown_files(directory: Path) -> list[Path]:
    if not directory.exists():
        return []
    return sorted(
        path for path in directory.iterdir() if path.suffix == ".md" and path.is_file()
    )


def _status_code(stem: str) -> int | None:
    if not _STATUS_CODE_NAME.fullmatch(stem):
        return None
    code = int(stem)
    return code if code <= 0xFFFF else None


def load_docs(root: str | os.PathLike[str]) -> DocLibrary:
    """Load documentation from ``annotations``, ``sections`` and ``status-codes`` under ``root``."""
    base = Path(root)
    library = DocLibrary()

    for path in _markdown_files(base / "annotations"):
        content = path.read_text(encoding="utf-8")
        name = f"@{path.stem}"
        library.annotations.setdefault(name, content.strip())
        library.summaries.setdefault(name, extract_summary(content))

    for path in _markdown_files(base / "sections"):
        content = path.read_text(encoding="utf-8")
        library.sections.setdefault(f"section:{path.stem}", content.strip())

    for path in _markdown_files(base / "status-codes"):
        code = _status_code(path.stem)
        if code is None:
            continue
        content = path.read_text(encoding="utf-8")
        library.status_codes.setdefault(code, format_status_code_info(content, code))

    return library