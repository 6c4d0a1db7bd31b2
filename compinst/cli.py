from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

from .config import load_config
from .discovery import ConfigDiscovery
from .errors import InstallerUserError
from .injectors import ListInjector, get_injector_by_name, get_injector_for_path
from .installer import ComponentInstaller, ConsoleIO, PackageInfo, ScriptedIO
from .report import ActionRecord, CheckResult, InstallReport, OptionInfo
from .types import ROLE_ORDER, ListRole, SyntaxVariant
from .version import tool_version

logger = logging.getLogger("compinst")

_ROLE_CHOICES = [r.value for r in ListRole]
_VARIANT_CHOICES = [v.slug for v in SyntaxVariant]


def _setup_logging(verbose: bool) -> None:
    debug = verbose or os.environ.get("COMPINST_DEBUG", "").lower() in ("1", "true", "yes")
    root = logging.getLogger("compinst")
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not root.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="compinst",
        description="Register components, modules and config providers in PHP config files",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--root", default=".", help="project root (default: current directory)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_target(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--file", metavar="PATH", help="config file relative to the project root")
        sp.add_argument(
            "--injector",
            metavar="NAME",
            help="injector to use for --file (default: the one owning the well-known path)",
        )
        sp.add_argument("--dry-run", action="store_true", help="report the change without writing it")

    sp_options = sub.add_parser("options", help="Config files that can take the given types (JSON)")
    sp_options.add_argument("--type", dest="types", nargs="+", choices=_ROLE_CHOICES, default=_ROLE_CHOICES)

    sp_check = sub.add_parser("check", help="Files already registering ENTRY (JSON)")
    sp_check.add_argument("entry")

    sp_inject = sub.add_parser("inject", help="Add ENTRY to a config file (JSON report)")
    sp_inject.add_argument("entry")
    sp_inject.add_argument("--type", dest="role", required=True, choices=_ROLE_CHOICES)
    sp_inject.add_argument("--variant", choices=_VARIANT_CHOICES, help="only edit a list written in this syntax")
    add_target(sp_inject)

    sp_remove = sub.add_parser("remove", help="Remove ENTRY from config files (JSON report)")
    sp_remove.add_argument("entry")
    sp_remove.add_argument("--type", dest="role", choices=_ROLE_CHOICES)
    add_target(sp_remove)

    sp_install = sub.add_parser("install", help="Run the post-install hook for a package (JSON report)")
    sp_install.add_argument("composer_json", help="path to the package composer.json")
    sp_install.add_argument("--no-dev", action="store_true", help="production mode: do nothing")
    sp_install.add_argument(
        "--answer",
        action="append",
        metavar="N",
        help="scripted answer to a prompt, in order (repeatable); prompts are interactive otherwise",
    )
    sp_install.add_argument("--dry-run", action="store_true")

    sp_uninstall = sub.add_parser("uninstall", help="Run the post-uninstall hook for a package (JSON report)")
    sp_uninstall.add_argument("composer_json", help="path to the package composer.json")
    sp_uninstall.add_argument("--no-dev", action="store_true", help="production mode: do nothing")
    sp_uninstall.add_argument("--dry-run", action="store_true")

    return p


def _dump(data: Any) -> None:
    sys.stdout.write(json.dumps(data, ensure_ascii=False))


def _explicit_injector(root: Path, ns: argparse.Namespace) -> ListInjector:
    """Injector bound to --file, chosen by --injector or by the well-known path."""
    variant = SyntaxVariant.from_slug(ns.variant) if getattr(ns, "variant", None) else None
    if ns.injector:
        try:
            cls = get_injector_by_name(ns.injector)
        except KeyError as e:
            raise ValueError(e.args[0]) from None
    else:
        cls = get_injector_for_path(ns.file)
        if cls is None:
            raise ValueError(f"No injector owns '{ns.file}'; pass --injector NAME")
    return cls(root, config_file=ns.file, variant=variant)


def _cmd_options(root: Path, ns: argparse.Namespace) -> None:
    roles = [ListRole.from_key(t) for t in ns.types]
    options = ConfigDiscovery(root, load_config(root)).available_options(roles)
    _dump([
        OptionInfo(
            index=i,
            prompt=o.prompt_text,
            injector=o.injector.name,
            file=o.injector.config_file or None,
            types=[r.value for r in ROLE_ORDER if r in o.injector.types_allowed()],
        ).model_dump(mode="json")
        for i, o in enumerate(options)
    ])


def _cmd_check(root: Path, ns: argparse.Namespace) -> None:
    options = ConfigDiscovery(root, load_config(root)).available_options(ROLE_ORDER)
    found = [o.prompt_text for o in options if not o.is_noop and o.injector.is_registered(ns.entry)]
    _dump(CheckResult(entry=ns.entry, registered_in=found).model_dump(mode="json"))


def _cmd_inject(root: Path, ns: argparse.Namespace) -> None:
    role = ListRole.from_key(ns.role)
    if ns.file:
        injector = _explicit_injector(root, ns)
    else:
        candidates = [
            o.injector for o in ConfigDiscovery(root, load_config(root)).available_options([role])
            if not o.is_noop
        ]
        if not candidates:
            raise ValueError(f"No config file in {root} can take a {role.value}")
        if len(candidates) > 1:
            files = ", ".join(c.config_file for c in candidates)
            raise ValueError(f"Several config files can take a {role.value} ({files}); choose one with --file")
        injector = candidates[0]
        if ns.variant:
            injector.variant = SyntaxVariant.from_slug(ns.variant)

    result = injector.inject(ns.entry, role, dry_run=ns.dry_run)
    report = InstallReport(actions=[ActionRecord.from_result(
        "inject", ns.entry, role.value, injector.config_file, injector.name, result, dry_run=ns.dry_run,
    )])
    _dump(report.model_dump(mode="json"))


def _cmd_remove(root: Path, ns: argparse.Namespace) -> None:
    role = ListRole.from_key(ns.role) if ns.role else None
    if ns.file:
        injectors: List[ListInjector] = [_explicit_injector(root, ns)]
    else:
        roles = [role] if role is not None else list(ROLE_ORDER)
        injectors = [
            o.injector for o in ConfigDiscovery(root, load_config(root)).available_options(roles)
            if not o.is_noop
        ]

    report = InstallReport()
    for injector in injectors:
        result = injector.remove(ns.entry, role, dry_run=ns.dry_run)
        report.actions.append(ActionRecord.from_result(
            "remove", ns.entry, role.value if role else None, injector.config_file,
            injector.name, result, dry_run=ns.dry_run,
        ))
    _dump(report.model_dump(mode="json"))


def _cmd_install(root: Path, ns: argparse.Namespace) -> None:
    package = PackageInfo.from_composer_json(Path(ns.composer_json))
    io = ScriptedIO(ns.answer) if ns.answer else ConsoleIO()
    installer = ComponentInstaller(root, io, dry_run=ns.dry_run)
    installer.activate()
    report = installer.on_post_package_install(package, dev_mode=not ns.no_dev)
    _dump(report.model_dump(mode="json"))


def _cmd_uninstall(root: Path, ns: argparse.Namespace) -> None:
    package = PackageInfo.from_composer_json(Path(ns.composer_json))
    installer = ComponentInstaller(root, ScriptedIO(), dry_run=ns.dry_run)
    installer.activate()
    report = installer.on_post_package_uninstall(package, dev_mode=not ns.no_dev)
    _dump(report.model_dump(mode="json"))


_COMMANDS = {
    "options": _cmd_options,
    "check": _cmd_check,
    "inject": _cmd_inject,
    "remove": _cmd_remove,
    "install": _cmd_install,
    "uninstall": _cmd_uninstall,
}


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)
    root = Path(ns.root).resolve()
    logger.debug("compinst %s: %s in %s", tool_version(), ns.cmd, root)

    try:
        if not root.is_dir():
            raise ValueError(f"Project root not found: {root}")
        _COMMANDS[ns.cmd](root, ns)
        return 0
    except InstallerUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
