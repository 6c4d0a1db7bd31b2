import pytest

from compinst.core import AnchorPattern, inspect_list, is_registered
from compinst.types import SyntaxVariant

PROVIDERS = (
    AnchorPattern.compile(SyntaxVariant.BRACKET_IMPORTED, r"\bnew\s+ConfigAggregator\s*\(\s*(?P<open>\[)"),
)
RETURN_LIST = (
    AnchorPattern.compile(SyntaxVariant.BRACKET_QUALIFIED, r"\breturn\s*(?P<open>\[)"),
)


@pytest.mark.parametrize("entry", ["Foo\\Bar", "\\Foo\\Bar"])
@pytest.mark.parametrize("written", ["'Foo\\Bar'", "'\\Foo\\Bar'", "'Foo\\\\Bar'", '"Foo\\\\Bar"', "\\Foo\\Bar::class"])
def test_entry_spellings_are_equivalent(entry, written):
    text = f"<?php\nreturn [\n    {written},\n];\n"
    assert is_registered(text, RETURN_LIST, entry)


def test_class_constant_resolves_through_imports():
    text = (
        "<?php\n"
        "use Laminas\\ConfigAggregator\\ConfigAggregator;\n"
        "use Foo\\ConfigProvider;\n"
        "use Bar\\ConfigProvider as BarProvider;\n"
        "$a = new ConfigAggregator([\n"
        "    ConfigProvider::class,\n"
        "    BarProvider::class,\n"
        "]);\n"
    )
    assert is_registered(text, PROVIDERS, "Foo\\ConfigProvider")
    assert is_registered(text, PROVIDERS, "\\Bar\\ConfigProvider")
    assert not is_registered(text, PROVIDERS, "ConfigProvider")


def test_names_outside_the_list_do_not_count():
    text = "<?php\n$x = 'Foo\\Bar';\nreturn [\n    'Other',\n];\n// 'Foo\\Bar'\n"
    assert not is_registered(text, RETURN_LIST, "Foo\\Bar")


def test_nested_values_and_keys_are_not_entries():
    text = "<?php\nreturn [\n    'Foo\\Bar' => ['x'],\n    ['Foo\\Bar'],\n];\n"
    assert not is_registered(text, RETURN_LIST, "Foo\\Bar")


def test_missing_list_means_not_registered():
    assert not is_registered("<?php\n$a = 1;\n", RETURN_LIST, "Foo\\Bar")


def test_inspect_list_reports_elements():
    text = "<?php\nreturn [\n    'A', // first\n    new Thing(1, 2),\n    'B'\n];\n"
    view = inspect_list(text, RETURN_LIST)
    assert [el.name for el in view.elements] == ["A", None, "B"]
    assert view.elements[0].comma_start is not None
    assert view.elements[-1].comma_start is None
    assert view.matching("\\B") == [2]
