"""Interface for ``python -m kv_flat``."""

from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ._version import version
from .engine import flatten, unflatten
from .options import FlatOptions
from .snapshots import diff_flatten


if TYPE_CHECKING:
    from argparse import Namespace
    from collections.abc import Sequence


__all__ = ["main"]

logger = logging.getLogger(__name__)


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="kv_flat", description="Flatten and unflatten nested JSON documents.")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="logging level (default: WARNING)",
    )
    _ = parser.add_argument("--indent", type=int, default=2, help="indentation of the JSON output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    flatten_parser = subparsers.add_parser("flatten", help="flatten a nested JSON object")
    _ = flatten_parser.add_argument("file", nargs="?", default="-", help="JSON file, or - for stdin")
    _ = flatten_parser.add_argument("--delimiter", default=".")
    _ = flatten_parser.add_argument("--max-depth", type=int, default=None)
    _ = flatten_parser.add_argument("--safe", action="store_true", help="keep lists as leaves")

    unflatten_parser = subparsers.add_parser("unflatten", help="expand a flat JSON object")
    _ = unflatten_parser.add_argument("file", nargs="?", default="-", help="JSON file, or - for stdin")
    _ = unflatten_parser.add_argument("--delimiter", default=".")
    _ = unflatten_parser.add_argument("--overwrite", action="store_true")
    _ = unflatten_parser.add_argument("--object-mode", action="store_true", help="never build lists")
    _ = unflatten_parser.add_argument("--key-order", choices=["length", "depth"], default="length")

    diff_parser = subparsers.add_parser("diff", help="compare two nested JSON objects key by key")
    _ = diff_parser.add_argument("old", help="previous JSON file")
    _ = diff_parser.add_argument("new", help="current JSON file")
    _ = diff_parser.add_argument("--delimiter", default=".")
    _ = diff_parser.add_argument("--max-depth", type=int, default=None)
    _ = diff_parser.add_argument("--safe", action="store_true", help="keep lists as leaves")

    return parser


def _load(parser: ArgumentParser, source: str) -> Any:
    try:
        if source == "-":
            return json.load(sys.stdin)
        with Path(source).open(encoding="utf-8") as stream:
            return json.load(stream)
    except OSError as exc:
        parser.error(f"cannot read {source}: {exc.strerror}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        parser.error(f"invalid JSON in {source}: {exc}")


def _options(parser: ArgumentParser, args: Namespace) -> FlatOptions:
    try:
        return FlatOptions(
            delimiter=args.delimiter,
            max_depth=getattr(args, "max_depth", None),
            safe=getattr(args, "safe", False),
            overwrite=getattr(args, "overwrite", False),
            object_mode=getattr(args, "object_mode", False),
            key_order=getattr(args, "key_order", "length"),
        )
    except ValueError as exc:
        parser.error(str(exc))


def main(args: Sequence[str] | None = None) -> None:
    """Run the flatten, unflatten or diff command."""
    parser = _build_parser()
    namespace = parser.parse_args(args)
    logging.basicConfig(level=namespace.log_level, format="%(levelname)s %(name)s: %(message)s")

    options = _options(parser, namespace)
    if namespace.command == "flatten":
        result: Any = flatten(_load(parser, namespace.file), options)
    elif namespace.command == "unflatten":
        result = unflatten(_load(parser, namespace.file), options)
    else:
        delta = diff_flatten(
            flatten(_load(parser, namespace.old), options),
            flatten(_load(parser, namespace.new), options),
        )
        result = {"added": delta.added, "removed": delta.removed, "changed": delta.changed}

    logger.debug("%s produced a %s", namespace.command, type(result).__name__)
    print(json.dumps(result, indent=namespace.indent))


if __name__ == "__main__":
    main()
