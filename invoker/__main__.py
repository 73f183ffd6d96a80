#!/usr/bin/env python3
r"""invoker CLI.

Commands:
    python -m invoker --version                    Show version
    python -m invoker info                         Show version and system info
    python -m invoker candidates MODULE:CLASS NAME List candidate methods

Examples:
    # Show detailed system info (for bug reports)
    python -m invoker info

    # See which methods a call to `get_user` would consider, in search order
    python -m invoker candidates myapp.services:UserService get_user

    # Only the public tier, with debug logging
    INVOKER_LOG_LEVEL=DEBUG python -m invoker candidates myapp.services:UserService get_user --public-only
"""

from __future__ import annotations

import argparse
import importlib
import sys
from typing import List, Optional


def cmd_info(args: argparse.Namespace) -> int:
    """Show detailed version and system information."""
    from ._version import print_version_info

    print_version_info()
    return 0


def load_class(target: str) -> type:
    """Import ``package.module:ClassName`` (nested ``Outer.Inner`` allowed).

    Raises:
        ValueError: if `target` is malformed or does not name a class.
    """
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Expected MODULE:CLASS, got {target!r}")

    obj = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise ValueError(f"{target} is not a class")
    return obj


def describe_primitive_slots(parameter_types: tuple) -> str:
    """Render primitive slots as `` [0: integer <-> int]``; empty if none."""
    from .primitives import boxed_type, primitive_kind

    slots = [
        f"{index}: {primitive_kind(tp)} <-> {boxed_type(tp).__name__}"
        for index, tp in enumerate(parameter_types)
        if primitive_kind(tp) is not None
    ]
    return f" [{', '.join(slots)}]" if slots else ""


def cmd_candidates(args: argparse.Namespace) -> int:
    """List candidate methods in resolver search order."""
    from .config import InvokerSettings
    from .resolver import iter_candidates
    from .utils import get_type_name

    settings = InvokerSettings()
    try:
        owner = load_class(args.target)
    except (ImportError, AttributeError, ValueError) as e:
        print(f"Error loading {args.target}: {e}", file=sys.stderr)
        return 1

    search_non_public = settings.search_non_public and not args.public_only
    found = 0
    for tier, handles in iter_candidates(owner, args.method, search_non_public):
        for handle in handles:
            found += 1
            visibility = "public" if handle.public else "non-public"
            print(
                f"{found:>3}. [{tier:<8}] {handle.describe()}"
                f"  ({handle.binding.value}, {visibility}, "
                f"declared on {get_type_name(handle.declaring_class)})"
                f"{describe_primitive_slots(handle.parameter_types)}"
            )

    if not found:
        print(f"No candidates named {args.method!r} on {get_type_name(owner)}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    from ._version import __version__

    parser = argparse.ArgumentParser(
        prog="invoker",
        description="Dynamic method dispatch over registered components.",
    )
    parser.add_argument(
        "--version", action="version", version=f"invoker {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command")

    info = subparsers.add_parser("info", help="Show version and system information")
    info.set_defaults(func=cmd_info)

    candidates = subparsers.add_parser(
        "candidates", help="List the methods a call would consider, in search order"
    )
    candidates.add_argument("target", help="Component class as MODULE:CLASS")
    candidates.add_argument("method", help="Method name")
    candidates.add_argument(
        "--public-only",
        action="store_true",
        help="Skip the declared (non-public) tier",
    )
    candidates.set_defaults(func=cmd_candidates)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    from .config import InvokerSettings

    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    InvokerSettings().configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
