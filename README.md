# rovolsp

`rovolsp` holds the editing logic for handlers that carry the `#[rovo]`
attribute. It works on plain document text and returns LSP-shaped values,
so an editor integration or a test can call it directly. Only `load_docs`
reads from disk. Nothing else in the package does I/O.

## What it offers

- **Code actions** (`rovolsp.code_actions`)
  - `get_code_actions(content, range, uri)` acts on a handler's `///` doc
    block. It offers to:
    - add a response entry or an example entry;
    - add the metadata annotations `@tag` and `@security`;
    - add `@id` and `@hidden`, when the block lacks them;
    - add a standard set of REST responses, when the block has no
      `# Responses` section.

    New sections go in the order `# Responses`, `# Examples`, `# Metadata`.
    Metadata annotations go in the order `@id`, `@tag`, `@security`,
    `@hidden`. Lines after `@rovo-ignore` are left alone.
  - Outside an annotated handler, it offers to add `#[rovo]` above the
    enclosing function.
  - Inside a struct or enum that lacks `JsonSchema`, it offers to add it to
    the `#[derive(...)]` list. If there is no derive list, it offers to
    insert a new `#[derive(JsonSchema)]`.
  - `get_diagnostic_code_actions(content, diagnostic, uri)` handles
    diagnostics whose message contains "Invalid HTTP status". It offers quick
    fixes that replace the code with 200, 201, 400, 404 or 500. The fix to
    200 is marked as preferred.
  - `add_jsonschema_to_derive(line)` rewrites a single `#[derive(...)]` line
    so that `JsonSchema` comes first in the list.
- **Context detection** (`rovolsp.context`)
  - `find_rovo_function_context` returns a `RovoContext`.
  - `find_function_for_rovo_init`.
  - `find_struct_context` returns a `StructContext`, or `None`.
- **Doc-section helpers** (`rovolsp.sections`)
  - `find_section` returns a `Section`, or `None`.
  - `find_section_insertion_point` and `find_metadata_insertion_point`.
  - `find_effective_doc_end`, `check_blank_line_requirements` and
    `annotation_type`.
- **Annotation documentation** (`rovolsp.docs`)
  - `load_docs(root)` reads the `.md` files under `root/annotations`,
    `root/sections` and `root/status-codes` and returns a `DocLibrary`.
  - The library offers `annotation_documentation`, `annotation_summary` and
    `status_code_info`.
  - `extract_summary` and `format_status_code_info` are also available on
    their own.
- **Protocol values** (`rovolsp.lsp_types`): `Position`, `Range`,
  `TextEdit`, `WorkspaceEdit`, `CodeAction`, `CodeActionKind` and
  `Diagnostic`.

## Example

```python
from rovolsp.code_actions import get_code_actions
from rovolsp.lsp_types import Range

source = '''/// Get a thing.
#[rovo]
async fn get_thing() -> Json<Thing> {
    todo()
}
'''

for action in get_code_actions(source, Range.insertion(1), "file:///api.rs"):
    print(action.title)
```

To list the edits that an action makes to the document, call
`action.edits_for("file:///api.rs")`.

## Documentation files

`load_docs` expects this layout:

```
docs/
  annotations/tag.md        -> "@tag"
  sections/responses.md     -> "section:responses"
  status-codes/404.md       -> status code 404
```

The summary of an annotation is the first non-empty line after the heading
that is not itself a heading.

For a status code, the result is a bold `code title` line followed by the
page text.

Lookups that find nothing give these results:

- `annotation_documentation` returns a fixed fallback message for an unknown
  annotation.
- `annotation_summary` returns `"Unknown annotation"`.
- `status_code_info` returns `None` for an undocumented status code.

## What it does not do

This package is a library, not a running language server. It has no
JSON-RPC transport and no command to start a server. It keeps no store of
open documents. It does not provide completion, hover, go-to-definition,
references, rename, semantic tokens or diagnostics. You pass in the document
text yourself and apply the returned edits yourself.

## Running the tests

```
pip install -e ".[test]"
pytest
```