"""
Tests for the pattern compiler (Layer 1: Source Text -> Recognized Spans).

Covers:
    - Priority of comments over declarations
    - Module declaration capture
    - Function declaration capture and the search prefix
    - Scanner coverage of the whole input
    - Known limits of the parameter list capture
"""

import pytest
from dynamizer.config import DynamizerConfig
from dynamizer.model import DeclarationMatch, LiteralSpan, MatchKind
from dynamizer.patterns import build_pattern, compile_matcher


def kinds(text, config=None):
    return [m.kind for m in compile_matcher(config).matches(text)]


class TestComments:
    """Comments are recognized before anything else."""

    def test_block_comment_spans_lines(self):
        text = "/* first\n   int x_init (int a);\n*/"
        matches = list(compile_matcher().matches(text))
        assert len(matches) == 1
        assert matches[0].kind == MatchKind.COMMENT
        assert matches[0].text == text

    def test_block_comment_is_not_greedy(self):
        text = "/* a */ int y; /* b */"
        matches = list(compile_matcher().matches(text))
        assert [m.text for m in matches] == ["/* a */", "/* b */"]

    def test_line_comment_stops_at_newline(self):
        text = "// int x_init (int a);\nint y;"
        matches = list(compile_matcher().matches(text))
        assert len(matches) == 1
        assert matches[0].kind == MatchKind.COMMENT
        assert matches[0].text == "// int x_init (int a);"

    def test_trailing_line_comment_hides_signature(self):
        text = "int y; // int x_init (int a);"
        assert kinds(text) == [MatchKind.COMMENT]

    def test_trailing_block_comment_hides_signature(self):
        text = "int y; /* int x_init (int a); */"
        assert kinds(text) == [MatchKind.COMMENT]

    def test_inline_block_comment_stays_in_return_type(self):
        matches = list(compile_matcher().matches("const(char)* /* utf8 */ x_name (int a);"))
        assert len(matches) == 1
        assert matches[0].kind == MatchKind.FUNCTION
        assert matches[0].return_type == "const(char)* /* utf8 */"
        assert matches[0].name == "x_name"

    def test_closed_comment_then_trailing_line_comment(self):
        text = "int y; /* note */ // int x_init (int a);"
        assert kinds(text) == [MatchKind.COMMENT, MatchKind.COMMENT]


class TestModuleDeclaration:
    """module a.b.c; captures the dotted path."""

    def test_simple_module(self):
        matches = list(compile_matcher().matches("module foo.bar;"))
        assert len(matches) == 1
        assert matches[0].kind == MatchKind.MODULE
        assert matches[0].module == "foo.bar"

    def test_single_segment_module(self):
        match = next(compile_matcher().matches("module freetype;"))
        assert match.module == "freetype"

    def test_unicode_identifiers(self):
        match = next(compile_matcher().matches("module bindings.ünïcode_2;"))
        assert match.module == "bindings.ünïcode_2"

    def test_segment_cannot_start_with_digit(self):
        assert kinds("module foo.2bar;") == []

    def test_module_keyword_is_case_sensitive(self):
        assert kinds("Module foo.bar;") == []


class TestFunctionDeclaration:
    """<ret> <prefix><suffix> (<params>); on one line."""

    def test_captures_groups(self):
        match = next(compile_matcher().matches("int x_init (int a, int b);"))
        assert match.kind == MatchKind.FUNCTION
        assert match.return_type == "int"
        assert match.name == "x_init"
        assert match.parameters == "(int a, int b)"

    def test_no_space_before_parameters(self):
        match = next(compile_matcher().matches("int x_init(int a, int b);"))
        assert match.name == "x_init"
        assert match.parameters == "(int a, int b)"

    def test_pointer_return_type(self):
        match = next(compile_matcher().matches("const(char)* x_name (void* handle);"))
        assert match.return_type == "const(char)*"
        assert match.name == "x_name"

    def test_empty_parameter_list(self):
        match = next(compile_matcher().matches("void x_quit ();"))
        assert match.parameters == "()"

    def test_parameters_may_span_lines(self):
        text = "int x_open (const(char)* path,\n    int flags);"
        match = next(compile_matcher().matches(text))
        assert match.parameters == "(const(char)* path,\n    int flags)"

    def test_return_type_does_not_cross_lines(self):
        text = "extern(C):\nint x_init (int a);"
        matches = list(compile_matcher().matches(text))
        assert len(matches) == 1
        assert matches[0].return_type == "int"

    def test_name_without_prefix_is_ignored(self):
        assert kinds("int y_init (int a);") == []

    def test_prefix_is_case_sensitive(self):
        assert kinds("int X_init (int a);") == []

    def test_prefix_alone_is_not_a_name(self):
        assert kinds("int x_ (int a);") == []

    def test_missing_semicolon_is_not_a_declaration(self):
        assert kinds("int x_init (int a)") == []


class TestSearchPrefix:
    """The configured prefix is used literally."""

    def test_custom_prefix(self):
        config = DynamizerConfig(search_prefix="gl")
        assert kinds("void glClear (uint mask);", config) == [MatchKind.FUNCTION]
        assert kinds("int x_foo (int a);", config) == []

    def test_prefix_is_escaped(self):
        config = DynamizerConfig(search_prefix="a.b")
        assert kinds("int a.bfoo (int a);", config) == [MatchKind.FUNCTION]
        assert kinds("int aXbfoo (int a);", config) == []

    def test_build_pattern_embeds_escaped_prefix(self):
        pattern = build_pattern(DynamizerConfig(search_prefix="SDL+"))
        assert r"SDL\+" in pattern

    def test_compile_does_not_touch_config(self):
        config = DynamizerConfig(search_prefix="FT_")
        matcher = compile_matcher(config)
        assert matcher.config is config
        assert config.search_prefix == "FT_"


class TestScan:
    """scan() yields literal spans and matches covering all input."""

    def test_concatenation_gives_back_input(self):
        text = "module a.b;\n\n// note\nint x_a (int);\nint y;\n/* c */\n"
        items = list(compile_matcher().scan(text))
        assert "".join(item.text for item in items) == text

    def test_items_in_document_order(self):
        text = "module a.b;\nint x_a (int);"
        items = list(compile_matcher().scan(text))
        assert isinstance(items[0], DeclarationMatch)
        assert items[0].kind == MatchKind.MODULE
        assert isinstance(items[1], LiteralSpan)
        assert items[1].text == "\n"
        assert items[2].kind == MatchKind.FUNCTION

    def test_no_match_is_one_literal(self):
        items = list(compile_matcher().scan("int main() { return 0; }"))
        assert items == [LiteralSpan("int main() { return 0; }")]

    def test_empty_input(self):
        assert list(compile_matcher().scan("")) == []


class TestParameterListLimits:
    """The parameter list ends at the first ');' after the name."""

    def test_nested_parentheses_before_terminator(self):
        match = next(compile_matcher().matches("void x_cb (void function(int) cb);"))
        assert match.parameters == "(void function(int) cb)"

    def test_attributes_after_parameters_swallow_next_declaration(self):
        text = "int x_a (int a) @nogc;\nint x_b (int b);"
        matches = list(compile_matcher().matches(text))
        assert len(matches) == 1
        assert matches[0].name == "x_a"
        assert matches[0].parameters == "(int a) @nogc;\nint x_b (int b)"
