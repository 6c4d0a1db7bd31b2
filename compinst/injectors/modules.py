from __future__ import annotations

from ..core import AnchorPattern, EntryStyle
from ..types import ListRole, SyntaxVariant
from .base import ListInjector


class ModulesConfigInjector(ListInjector):
    """
    config/modules.config.php: the file returns the module list itself.

        return [
            'Laminas\\Router',
            'Application',
        ];
    """
    name = "modules-config"
    config_file = "config/modules.config.php"
    allowed_types = frozenset({ListRole.COMPONENT, ListRole.MODULE})
    anchors = (
        AnchorPattern.compile(SyntaxVariant.BRACKET_QUALIFIED, r"\breturn\s*(?P<open>\[)"),
        AnchorPattern.compile(SyntaxVariant.FUNCTION_QUALIFIED, r"\breturn\s+(?P<open>(?i:array)\s*\()"),
    )
    default_style = EntryStyle(kind="string", quote="'")
