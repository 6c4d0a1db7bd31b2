from __future__ import annotations

from ..core import AnchorPattern, EntryStyle
from ..types import ListRole, SyntaxVariant
from .base import ListInjector

_BRACKET = r"(?P<open>\[)"
_FUNCTION = r"(?P<open>(?i:array)\s*\()"

# `use Laminas\ConfigAggregator\ConfigAggregator;` + `new ConfigAggregator(`
_IMPORTED = r"\bnew\s+ConfigAggregator\s*\(\s*"
# `new \Laminas\ConfigAggregator\ConfigAggregator(` (leading separator optional)
_QUALIFIED = r"\bnew\s+\\?(?:Laminas|Zend)\\ConfigAggregator\\ConfigAggregator\s*\(\s*"


class ConfigAggregatorInjector(ListInjector):
    """
    Config providers passed as the first argument of `new ConfigAggregator(...)`
    in config/config.php.

    Both list syntaxes are recognised, with the aggregator class either
    imported or written fully qualified. Providers are written as
    `\\Vendor\\Package\\ConfigProvider::class` unless the list already
    uses another convention.
    """
    name = "config-aggregator"
    config_file = "config/config.php"
    allowed_types = frozenset({ListRole.CONFIG_PROVIDER})
    anchors = (
        AnchorPattern.compile(SyntaxVariant.BRACKET_IMPORTED, _IMPORTED + _BRACKET),
        AnchorPattern.compile(SyntaxVariant.BRACKET_QUALIFIED, _QUALIFIED + _BRACKET),
        AnchorPattern.compile(SyntaxVariant.FUNCTION_IMPORTED, _IMPORTED + _FUNCTION),
        AnchorPattern.compile(SyntaxVariant.FUNCTION_QUALIFIED, _QUALIFIED + _FUNCTION),
    )
    default_style = EntryStyle(kind="class")
