"""
Tests for the structural reformatter.
"""

from codetools.core.reformatter import IndentState, StructuralReformatter, reformat


class TestReformatLayout:
    def test_function_example(self):
        assert reformat("function f(){return 1;}") == "function f() {\n    return 1;\n}"

    def test_nested_blocks(self):
        text = "if(a){if(b){c();}}"
        assert reformat(text) == "if(a) {\n    if(b) {\n        c();\n    }\n}"

    def test_statements_split_on_semicolons(self):
        assert reformat("a=1;b=2;") == "a=1;\nb=2;"

    def test_opener_alone_when_nothing_pending(self):
        assert reformat("{a;}") == "{\n    a;\n}"

    def test_array_brackets(self):
        assert reformat("x=[1,2];") == "x=[\n    1,2\n];"

    def test_bracket_keeps_source_spacing(self):
        assert reformat("items[0];").startswith("items[\n")
        assert reformat("return [0];").startswith("return [\n")

    def test_trailing_punctuation_stays_on_closer(self):
        assert reformat("var o={a:1};") == "var o= {\n    a:1\n};"
        assert reformat("f({a:1});") == "f({\n    a:1\n});"

    def test_closer_followed_by_keyword(self):
        assert reformat("if(a){b;}else{c;}") == (
            "if(a) {\n    b;\n}\nelse {\n    c;\n}"
        )

    def test_existing_newlines_are_kept(self):
        assert reformat("a\nb") == "a\nb"

    def test_line_comment_does_not_swallow_code(self):
        assert reformat("// note\nx;") == "// note\nx;"

    def test_carriage_returns_end_lines(self):
        assert reformat("// one\rx;\ry;") == "// one\nx;\ny;"
        assert reformat("a\r\nb") == "a\nb"

    def test_empty_and_blank_input(self):
        assert reformat("") == ""
        assert reformat("  \n\n ") == ""

    def test_custom_indent_unit(self):
        reformatter = StructuralReformatter(indent_unit="\t")
        assert reformatter.reformat("a{b;}") == "a {\n\tb;\n}"


class TestLiterals:
    def test_structural_chars_in_string_stay_on_line(self):
        assert reformat('x = "a{b}c";') == 'x = "a{b}c";'

    def test_template_literal_preserved(self):
        assert reformat("s=`{${a};}`;") == "s=`{${a};}`;"

    def test_block_comment_preserved(self):
        assert reformat("a;/* {;} */b;") == "a;\n/* {;} */b;"

    def test_unterminated_string_kept_to_end(self):
        assert reformat('a;"b{c;') == 'a;\n"b{c;'


class TestIndentFloor:
    def test_extra_closers_stay_at_level_zero(self):
        assert reformat("}}}") == "}\n}\n}"

    def test_unbalanced_closers_then_block(self):
        assert reformat("}a{b;}") == "}\na {\n    b;\n}"

    def test_indent_state_floor(self):
        state = IndentState()
        state.dedent()
        assert state.level == 0
        state.indent()
        state.indent()
        state.dedent()
        assert state.level == 1


class TestIdempotence:
    def test_reformat_of_output_is_stable(self):
        text = "function f(a){if(a){return [1,2];}else{return {b:1};}}"
        once = reformat(text)
        assert reformat(once) == once
