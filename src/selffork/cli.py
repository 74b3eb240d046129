"""Command-line interface for selffork."""

import argparse
import importlib
import logging
import sys

from selffork import __version__
from selffork.registry import default_registry
from selffork.signature import Signature

log = logging.getLogger("selffork")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="selffork",
        description="Inspect functions that a program can run in a re-executed copy of itself",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)
    describe = subparsers.add_parser(
        "describe",
        help="Show the coarse-kind signature of fork targets",
    )
    describe.add_argument(
        "targets",
        nargs="+",
        metavar="module[:function]",
        help="A function to describe, or a module whose registered targets to list",
    )
    return parser


def describe_target(target: str) -> list[str]:
    """Return signature lines for ``module:function`` or a module's registered targets."""
    module_name, _, attr = target.partition(":")
    module = importlib.import_module(module_name)
    if attr:
        fn = module
        for part in attr.split("."):
            fn = getattr(fn, part)
        return [Signature.from_callable(fn).describe()]

    return [
        f"{name}: {Signature.from_callable(default_registry.get(name)).describe()}"
        for name in default_registry.names()
    ]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    for target in args.targets:
        try:
            lines = describe_target(target)
        except (ImportError, AttributeError) as e:
            print(f"Error: {target}: {e}", file=sys.stderr)
            return 1
        log.debug("%s: %d signature(s)", target, len(lines))
        for line in lines:
            print(line)
    return 0


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
