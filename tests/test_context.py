import pytest

from rovolsp.context import (
    RovoContext,
    StructContext,
    find_function_for_rovo_init,
    find_rovo_function_context,
    find_struct_context,
)

SOURCE = """/// Get a todo.
///
/// # Responses
///
/// 200: Json<TodoItem> - ok
#[rovo]
async fn get_todo() -> Json<TodoItem> {
    let x = 1;
    x
}

fn plain() {
    let y = 2;
}

#[derive(Debug, Clone)]
struct Todo {
    id: u32,
}
"""


@pytest.mark.parametrize("line", [0, 2, 4, 5, 6, 7, 8])
def test_rovo_context_near_rovo_function(line):
    assert find_rovo_function_context(SOURCE, line) == RovoContext(True, 5, 6)


@pytest.mark.parametrize("line", [10, 11, 12, 13, 17, 100])
def test_rovo_context_away_from_rovo_function(line):
    assert find_rovo_function_context(SOURCE, line) == RovoContext(False, None, None)


def test_rovo_attribute_without_following_function():
    content = "#[rovo]\n\n\n\n\n\nfn late() {\n}\n"
    assert find_rovo_function_context(content, 0) == RovoContext(True, 0, None)


def test_rovo_context_handles_crlf_lines():
    content = "#[rovo]\r\nfn a() {\r\n}\r\n"
    assert find_rovo_function_context(content, 0) == RovoContext(True, 0, 1)
    assert find_rovo_function_context(content, 1) == RovoContext(True, 0, 1)


def test_doc_comment_of_plain_function_is_not_near():
    content = "/// Docs\nfn plain() {\n}\n"
    assert find_rovo_function_context(content, 0).is_near_rovo is False


def test_init_offered_on_plain_signature_and_body():
    assert find_function_for_rovo_init(SOURCE, 11) == (11, 11)
    assert find_function_for_rovo_init(SOURCE, 12) == (11, 11)


@pytest.mark.parametrize("line", [6, 7])
def test_init_not_offered_when_rovo_present(line):
    assert find_function_for_rovo_init(SOURCE, line) is None


@pytest.mark.parametrize("line", [0, 5, 9, 10, 15, 100])
def test_init_not_offered_on_comments_attributes_or_blank(line):
    assert find_function_for_rovo_init(SOURCE, line) is None


def test_init_not_offered_after_closing_brace():
    content = "fn a() {\n}\n    stray\n"
    assert find_function_for_rovo_init(content, 2) is None


def test_init_requires_opening_brace():
    content = "fn a(\n    x: u32,\n"
    assert find_function_for_rovo_init(content, 0) is None


def test_struct_context_with_plain_derive():
    info = find_struct_context(SOURCE, 17)
    assert info == StructContext(16, 15, False)
    assert info.has_derive is True


def test_struct_context_with_jsonschema_across_doc_comment():
    content = "#[derive(Serialize, JsonSchema)]\n/// A thing\nstruct Thing {\n    a: u8,\n}\n"
    info = find_struct_context(content, 3)
    assert info == StructContext(2, 0, True)


def test_struct_context_without_derive():
    content = "use x;\n\nstruct Bare {\n    a: u8,\n}\n"
    info = find_struct_context(content, 3)
    assert info.struct_line == 2
    assert info.derive_line is None
    assert info.has_derive is False
    assert info.has_jsonschema is False


def test_struct_context_for_enum():
    content = "enum Color {\n    Red,\n}\n"
    assert find_struct_context(content, 1).struct_line == 0


@pytest.mark.parametrize(
    "content, line",
    [
        (SOURCE, 15),
        ("struct Unit;\n", 0),
        ("// struct Foo {\n    a: u8,\n", 1),
        (SOURCE, 100),
    ],
)
def test_struct_context_absent(content, line):
    assert find_struct_context(content, line) is None