# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the typegraph command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from typegraph.compiler.build import CompiledApi, CompilerError, compile_catalog
from typegraph.export.json_schema import render_json_schema
from typegraph.export.zod import render_zod
from typegraph.workspace.config import CATALOG_FILE_NAME, CatalogError, load_catalog

# ###############
# Public Interface
# ###############

EXPORT_FORMATS = ("json-schema", "zod")


def main() -> None:
    """Run the typegraph CLI."""
    parser = argparse.ArgumentParser(
        prog="typegraph",
        description="typegraph: compile API resource catalogs into type definitions",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log compiler activity to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Compile a catalog and report its types",
        description="Compile a resource catalog and report any configuration errors.",
    )
    check_parser.add_argument(
        "catalog",
        nargs="?",
        default=CATALOG_FILE_NAME,
        help=f"Path to the catalog file (default: {CATALOG_FILE_NAME})",
    )

    # export subcommand
    export_parser = subparsers.add_parser(
        "export",
        help="Export the types exposed by a catalog",
        description="Compile a resource catalog and render its reachable types.",
    )
    export_parser.add_argument(
        "catalog",
        nargs="?",
        default=CATALOG_FILE_NAME,
        help=f"Path to the catalog file (default: {CATALOG_FILE_NAME})",
    )
    export_parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="json-schema",
        help="Output format (default: json-schema)",
    )
    export_parser.add_argument(
        "--output",
        "-o",
        help="File to write to (default: standard output)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "export":
        return _cmd_export(args)
    return 0


def _compile(path: Path) -> CompiledApi | None:
    """Load and compile the catalog at *path*, reporting errors on stderr."""
    try:
        config = load_catalog(path)
    except CatalogError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    try:
        return compile_catalog(config.catalog, config.actions)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    api = _compile(Path(args.catalog))
    if api is None:
        return 1

    surface = api.surface()
    lazy = [entry.name for entry in api.ordered_types() if entry.lazy]
    print(f"Compiled {len(api.registry.scopes()) - 1} scope(s) with {len(api.actions)} action(s).")
    print(f"Registered {len(api.registry.types())} type(s) and {len(api.registry.enums())} enum(s).")
    print(f"Exposed {len(surface.types)} type(s) and {len(surface.enums)} enum(s).")
    if lazy:
        print(f"Recursive types: {', '.join(lazy)}")
    print("No issues found.")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """Handle the export subcommand."""
    api = _compile(Path(args.catalog))
    if api is None:
        return 1

    entries = api.ordered_types()
    enums = api.exported_enums()
    if args.format == "zod":
        text = render_zod(entries, enums)
    else:
        text = render_json_schema(entries, enums, title=Path(args.catalog).stem)

    if args.output is None:
        sys.stdout.write(text)
        return 0

    output = Path(args.output)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {args.format} export to '{output}'.")
    return 0
