from compinst.core import AnchorPattern, locate
from compinst.core.scanner import CodeMap, scan
from compinst.types import SyntaxVariant


def kinds(text):
    return [(t.kind, t.text) for t in scan(text) if t.kind != "space"]


def test_tokens_concatenate_back_to_text():
    text = "<?php\nreturn ['a' => [1, 2], /* c */ \"b\\\"\" # x\n];\r\n"
    assert "".join(t.text for t in scan(text)) == text


def test_delimiters_inside_strings_and_comments_are_not_tokens():
    text = "['a]', \"(b\" // ]\n /* ) */ # [\n]"
    toks = kinds(text)
    assert toks == [
        ("open", "["),
        ("string", "'a]'"),
        ("comma", ","),
        ("string", '"(b"'),
        ("comment", "// ]"),
        ("comment", "/* ) */"),
        ("comment", "# ["),
        ("close", "]"),
    ]


def test_escaped_quote_does_not_end_string():
    toks = kinds(r"['it\'s', 'x']")
    assert ("string", r"'it\'s'") in toks
    assert ("string", "'x'") in toks


def test_attribute_hash_bracket_is_code_not_comment():
    toks = kinds("#[Attr]\nfoo();")
    assert toks[0] == ("code", "#")
    assert ("open", "[") in toks


def test_line_comment_stops_at_close_tag():
    toks = kinds("// note ?>text")
    assert toks[0] == ("comment", "// note ")


def test_unterminated_string_runs_to_end():
    toks = scan("['abc")
    assert toks[-1].kind == "string"
    assert toks[-1].end == len("['abc")


def test_code_map_distinguishes_code_from_literals():
    text = "$a = 'x'; // y\n$b;"
    cmap = CodeMap.of(text)
    assert cmap.is_code(text.index("$a"))
    assert not cmap.is_code(text.index("x"))
    assert not cmap.is_code(text.index("y"))
    assert cmap.is_code(text.index("$b"))
    assert cmap.starts_literal(text.index("'x'"))
    assert not cmap.starts_literal(text.index("x"))


def test_heredoc_and_nowdoc_are_strings():
    text = "$a = [<<<EOT\n  ] ) {\n  EOT, <<<'RAW'\n]\nRAW\n];"
    toks = kinds(text)
    assert ("string", "<<<EOT\n  ] ) {\n  EOT") in toks
    assert ("string", "<<<'RAW'\n]\nRAW") in toks
    assert [t for t in toks if t[0] in ("open", "close")] == [("open", "["), ("close", "]")]


def test_heredoc_label_must_end_the_closing_word():
    text = "<<<END\nENDING ]\nEND;"
    toks = kinds(text)
    assert toks[0] == ("string", "<<<END\nENDING ]\nEND")


def test_shift_operator_is_not_a_heredoc():
    toks = kinds("$x = 1 << 2; $y = [];")
    assert ("open", "[") in toks
    assert all(kind != "string" for kind, _ in toks)


def test_list_with_heredoc_element_is_located():
    text = "<?php\n$list = [\n    <<<TXT\n    ]\n    TXT,\n    'A',\n];\n"
    anchors = (AnchorPattern.compile(SyntaxVariant.BRACKET_QUALIFIED, r"\$list\s*=\s*(?P<open>\[)"),)
    span = locate(text, anchors)
    assert text[span.end] == "]"
    assert span.end == text.rindex("]")
