from __future__ import annotations

from typing import Tuple

from ..core import AnchorPattern, EntryStyle
from ..types import ListRole, SyntaxVariant
from .base import ListInjector

# 'modules' => [ ... ]  /  "modules" => array( ... )
_MODULES_KEY = r"(?P<q>['\"])modules(?P=q)\s*=>\s*"


def modules_key_anchors() -> Tuple[AnchorPattern, ...]:
    return (
        AnchorPattern.compile(SyntaxVariant.BRACKET_QUALIFIED, _MODULES_KEY + r"(?P<open>\[)"),
        AnchorPattern.compile(SyntaxVariant.FUNCTION_QUALIFIED, _MODULES_KEY + r"(?P<open>(?i:array)\s*\()"),
    )


class ApplicationConfigInjector(ListInjector):
    """Module list under the `'modules'` key of config/application.config.php."""
    name = "application-config"
    config_file = "config/application.config.php"
    allowed_types = frozenset({ListRole.COMPONENT, ListRole.MODULE})
    anchors = modules_key_anchors()
    default_style = EntryStyle(kind="string", quote="'")
