import pytest

from compinst.core import AnchorPattern, remove
from compinst.types import SkipReason, SyntaxVariant

LIST = (
    AnchorPattern.compile(SyntaxVariant.BRACKET_QUALIFIED, r"\breturn\s*(?P<open>\[)"),
)


def test_remove_middle_line():
    text = "<?php\nreturn [\n    'A',\n    'B',\n    'C',\n];\n"
    res = remove(text, LIST, "B")
    assert res.changed
    assert res.text == "<?php\nreturn [\n    'A',\n    'C',\n];\n"


def test_remove_first_line():
    text = "<?php\nreturn [\n    'A',\n    'B',\n];\n"
    assert remove(text, LIST, "A").text == "<?php\nreturn [\n    'B',\n];\n"


def test_remove_last_without_trailing_comma_drops_dangling_comma():
    text = "<?php\nreturn [\n    'A',\n    'B'\n];\n"
    assert remove(text, LIST, "B").text == "<?php\nreturn [\n    'A'\n];\n"


def test_remove_keeps_comment_sharing_the_line():
    text = "<?php\nreturn [\n    'A', // pinned\n    'B',\n];\n"
    assert remove(text, LIST, "A").text == "<?php\nreturn [\n    // pinned\n    'B',\n];\n"


def test_remove_comment_line_above_entry_is_kept():
    text = "<?php\nreturn [\n    // tools\n    'A',\n    'B',\n];\n"
    assert remove(text, LIST, "A").text == "<?php\nreturn [\n    // tools\n    'B',\n];\n"


def test_remove_only_entry_leaves_empty_list():
    assert remove("<?php\nreturn [\n    'A',\n];\n", LIST, "A").text == "<?php\nreturn [\n];\n"
    assert remove("<?php return ['A'];", LIST, "A").text == "<?php return [];"
    assert remove("<?php return ['A',];", LIST, "A").text == "<?php return [];"


@pytest.mark.parametrize("text, expected", [
    ("<?php return ['A', 'B', 'C'];", "<?php return ['A', 'C'];"),
    ("<?php return ['B', 'C'];", "<?php return ['C'];"),
    ("<?php return ['A', 'B'];", "<?php return ['A'];"),
    ("<?php return ['A', 'B',];", "<?php return ['A',];"),
])
def test_remove_from_inline_list(text, expected):
    assert remove(text, LIST, "B").text == expected


def test_remove_every_duplicate():
    text = "<?php\nreturn [\n    'A',\n    '\\A',\n    'B',\n    'A',\n];\n"
    assert remove(text, LIST, "A").text == "<?php\nreturn [\n    'B',\n];\n"


def test_class_constant_split_over_lines_is_not_matched():
    text = "<?php\nreturn [\n    'A',\n    \\Foo\\Bar\n        ::class,\n    'B',\n];\n"
    assert remove(text, LIST, "Foo\\Bar").skipped is SkipReason.ALREADY_ABSENT


def test_remove_absent_entry_is_identity():
    text = "<?php\nreturn [\n    'A',\n];\n"
    res = remove(text, LIST, "Missing")
    assert not res.changed
    assert res.skipped is SkipReason.ALREADY_ABSENT
    assert res.text == text


def test_remove_without_list_is_construct_not_found():
    text = "<?php\n$a = [];\n"
    res = remove(text, LIST, "A")
    assert res.skipped is SkipReason.CONSTRUCT_NOT_FOUND
    assert res.text == text
