# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from rollbook.adapters.extraction import matched_extraction_document
from rollbook.app import (
    migrate_sessions_file,
    open_catalog,
    reconcile_payload_file,
    write_matched_extraction,
)
from rollbook.config import ConfigurationError, configure_logging, get_storage_config
from rollbook.domain.model import Perspective, TechniqueCategory

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from rollbook.domain.catalog import Catalog

log = logging.getLogger(__name__)


class CliUsageError(ValueError):
    """Raised for invalid user input detected after argument parsing."""


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse and reconcile the rollbook catalog")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tree = subparsers.add_parser("tree", help="Print the position tree")
    tree.add_argument(
        "--techniques",
        action="store_true",
        help="List the techniques attached to each position",
    )

    match_position = subparsers.add_parser(
        "match-position", help="Fuzzy-match a position name against the catalog"
    )
    match_position.add_argument("query", type=str, help="Position name to match")

    match_technique = subparsers.add_parser(
        "match-technique", help="Fuzzy-match a technique name against the catalog"
    )
    match_technique.add_argument("query", type=str, help="Technique name to match")
    match_technique.add_argument(
        "--position",
        type=str,
        help="Position id used to prefer techniques that start from that position",
    )

    reconcile = subparsers.add_parser(
        "reconcile", help="Match an extraction payload JSON file against the catalog"
    )
    reconcile.add_argument("payload", type=Path, help="Path to the extraction payload JSON")
    reconcile.add_argument(
        "--output",
        type=Path,
        help="Write the matched extraction here instead of printing it",
    )

    add_position = subparsers.add_parser("add-position", help="Create a custom position")
    add_position.add_argument("name", type=str, help="Display name of the new position")
    add_position.add_argument("--parent", type=str, help="Parent position id")
    add_position.add_argument(
        "--perspective",
        type=Perspective,
        choices=list(Perspective),
        help="Perspective (defaults to the parent's, or neutral for roots)",
    )

    add_technique = subparsers.add_parser("add-technique", help="Create a custom technique")
    add_technique.add_argument("name", type=str, help="Display name of the new technique")
    add_technique.add_argument(
        "--category",
        type=TechniqueCategory,
        choices=list(TechniqueCategory),
        required=True,
        help="Technique category",
    )
    add_technique.add_argument(
        "--from",
        dest="position_from",
        type=str,
        required=True,
        help="Id of the position the technique starts from",
    )
    add_technique.add_argument(
        "--to",
        dest="position_to",
        type=str,
        help="Id of the position the technique ends in",
    )

    migrate = subparsers.add_parser(
        "migrate-sessions", help="Upgrade a sessions file to the current record version"
    )
    migrate.add_argument(
        "sessions",
        type=Path,
        nargs="?",
        help="Path to the sessions JSON file (defaults to the one in the data directory)",
    )
    migrate.add_argument(
        "--output",
        type=Path,
        help="Write the migrated sessions here instead of rewriting the input",
    )

    return parser.parse_args(list(argv))


def _print_tree(catalog: Catalog, *, with_techniques: bool) -> None:
    index = catalog.index
    for position in index.pre_order():
        indent = "  " * index.depth(position.id)
        marker = " *" if position.is_custom else ""
        print(f"{indent}{position.name} [{position.id}]{marker}")
        if with_techniques:
            for technique in index.techniques_owned_by(position.id):
                print(f"{indent}  - {technique.name} ({technique.category}) [{technique.id}]")


def _print_no_match(kind: str, query: str) -> None:
    print(f"No {kind} match for {query!r}")


def _run_command(args: argparse.Namespace) -> None:
    if args.command == "migrate-sessions":
        path = args.sessions or get_storage_config().sessions_path(ensure=False)
        if not path.exists():
            raise CliUsageError(f"Sessions file not found: {path}")
        sessions, failures = migrate_sessions_file(path, output=args.output)
        print(f"Migrated {len(sessions)} session(s); {len(failures)} failed")
        for failure in failures:
            print(
                f"  {failure.record_id or '<unknown>'}: {failure.reason}",
                file=sys.stderr,
            )
        return

    with open_catalog() as catalog:
        if args.command == "tree":
            _print_tree(catalog, with_techniques=args.techniques)
        elif args.command == "match-position":
            match = catalog.matchers.match_position(args.query)
            if match is None:
                _print_no_match("position", args.query)
            else:
                path = catalog.index.full_path(match.entity.id)
                print(f"{path} [{match.entity.id}] score={match.score:.3f}")
        elif args.command == "match-technique":
            if args.position is not None and args.position not in catalog.index:
                raise CliUsageError(f"Unknown position id: {args.position}")
            match = catalog.matchers.match_technique(args.query, args.position)
            if match is None:
                _print_no_match("technique", args.query)
            else:
                owner = catalog.index.full_path(match.entity.position_from_id)
                print(
                    f"{match.entity.name} ({owner}) [{match.entity.id}] score={match.score:.3f}"
                )
        elif args.command == "reconcile":
            result = reconcile_payload_file(args.payload, catalog)
            if args.output is not None:
                write_matched_extraction(result, args.output)
                log.info("Wrote matched extraction to %s", args.output)
            else:
                print(json.dumps(matched_extraction_document(result), indent=2))
            for name in result.unmatched_positions():
                print(f"Unmatched position: {name}", file=sys.stderr)
            for name in result.unmatched_techniques():
                print(f"Unmatched technique: {name}", file=sys.stderr)
        elif args.command == "add-position":
            position = catalog.create_position(
                args.name, parent_id=args.parent, perspective=args.perspective
            )
            if position is None:
                raise CliUsageError(f"Cannot create position {args.name!r}")
            print(f"{catalog.index.full_path(position.id)} [{position.id}]")
        elif args.command == "add-technique":
            technique = catalog.create_technique(
                args.name,
                args.category,
                args.position_from,
                position_to_id=args.position_to,
            )
            if technique is None:
                raise CliUsageError(f"Cannot create technique {args.name!r}")
            print(f"{technique.name} [{technique.id}]")
        else:
            raise CliUsageError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run_command(parsed_args)
    except (ConfigurationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while running %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
