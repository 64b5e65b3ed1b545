"""
DIRE CLI - Command-line interface for enrichment.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from dire import __version__
from dire.core.engine import Enricher
from dire.groups import (
    GroupConfigError,
    all_state,
    apply_profile,
    derive_options_snapshot,
    get_tree,
    group_state,
    list_profiles,
    load_profile,
    toggle,
)
from dire.ir.schema import EnrichmentOptions, TextDocument
from dire.ir.serialization import save, to_json
from dire.rules.registry import ordered_rules
from dire.store import JournalFileStore, StoreError, enrich_journal
from dire.validate import IdempotenceValidator
from dire.vocabulary.loader import get_vocabulary


def build_options(
    profile: str = "all",
    enable: Optional[list[str]] = None,
    disable: Optional[list[str]] = None,
) -> EnrichmentOptions:
    """
    Options snapshot from a profile plus explicit node toggles.

    Raises:
        FileNotFoundError: If the profile doesn't exist
        GroupConfigError: If the profile is invalid
        ValueError: If a toggle names an unknown group or rule
    """
    tree = get_tree()
    selections = apply_profile(tree, load_profile(profile, tree))
    for node_id in enable or []:
        selections = toggle(tree, selections, node_id, True)
    for node_id in disable or []:
        selections = toggle(tree, selections, node_id, False)
    return derive_options_snapshot(tree, selections)


def _split_ids(values: Optional[list[str]]) -> list[str]:
    ids: list[str] = []
    for value in values or []:
        ids.extend(v.strip() for v in value.split(",") if v.strip())
    return ids


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profile",
        type=str,
        default="all",
        choices=list_profiles(),
        help="Selection profile to start from (default: all)",
    )
    parser.add_argument(
        "--enable",
        action="append",
        default=None,
        help="Comma-separated groups or rules to enable on top of the profile",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=None,
        help="Comma-separated groups or rules to disable on top of the profile",
    )
    parser.add_argument(
        "--vocabulary",
        type=str,
        default=None,
        help="Path to a vocabulary YAML file (default: bundled dnd5e, or DIRE_VOCABULARY)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Re-run every rule on its output and report any that are not stable",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format: text (default) or json (full batch result)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or DIRE_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (pipeline,rule,vocab,groups,store,system). Default: all",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="dire",
        description="Directive Inline Roll Enricher",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"dire {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    enrich_parser = subparsers.add_parser("enrich", help="Enrich a piece of text")
    enrich_parser.add_argument(
        "input",
        type=str,
        help="Input text or path to file (use - for stdin)",
    )
    enrich_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    _add_selection_arguments(enrich_parser)

    journal_parser = subparsers.add_parser("journal", help="Enrich a journal JSON file in place")
    journal_parser.add_argument("path", type=str, help="Path to <journal_id>.json")
    journal_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute changes without writing the journal",
    )
    _add_selection_arguments(journal_parser)

    groups_parser = subparsers.add_parser("groups", help="Show the rule group tree")
    groups_parser.add_argument("--profile", type=str, default="all", choices=list_profiles())

    subparsers.add_parser("rules", help="List rules in application order")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "rules":
        return run_rules()
    if args.command == "groups":
        return run_groups(args)

    _configure_logging(args)
    try:
        options = build_options(args.profile, _split_ids(args.enable), _split_ids(args.disable))
    except (FileNotFoundError, GroupConfigError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.command == "enrich":
        return run_enrich(args, options)
    if args.command == "journal":
        return run_journal(args, options)

    return 0


def _configure_logging(args: argparse.Namespace) -> None:
    from dire.core.logging import configure_logging

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(level=args.log_level, channels=channels, force=True)


def _make_enricher(args: argparse.Namespace) -> Enricher:
    validators = [IdempotenceValidator()] if args.validate else []
    return Enricher(get_vocabulary(args.vocabulary), validators=validators)


def run_enrich(args: argparse.Namespace, options: EnrichmentOptions) -> int:
    """Run the enrich command."""
    if args.input == "-":
        text = sys.stdin.read()
    elif len(args.input) < 256 and Path(args.input).exists():
        # Only check as path if it's short enough to be a valid path
        text = Path(args.input).read_text(encoding="utf-8")
    else:
        text = args.input

    try:
        enricher = _make_enricher(args)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    result = enricher.apply_all([TextDocument(id="input", content=text)], options)

    if args.format == "json":
        if args.output:
            save(result, args.output)
            return 0
        output = to_json(result)
    else:
        update = result.get_update("input")
        output = update.content if update else text
        if result.diagnostics:
            output += "\n\n--- Diagnostics ---\n"
            for diag in result.diagnostics:
                output += f"[{diag.level.value}] {diag.code}: {diag.message}\n"

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output)

    return 0


def run_journal(args: argparse.Namespace, options: EnrichmentOptions) -> int:
    """Run the journal command."""
    store, journal_id = JournalFileStore.for_file(args.path)
    try:
        outcome = enrich_journal(store, journal_id, options, _make_enricher(args), dry_run=args.dry_run)
    except (StoreError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(to_json(outcome.result))
    else:
        message = outcome.message
        if args.dry_run and outcome.updated:
            message = f"Would update {outcome.updated} page(s) (dry run)."
        print(message)
    return 0


def run_rules() -> int:
    """Print rule ids in application order."""
    for rule in ordered_rules():
        print(f"{rule.id.value:<16} {rule.description}")
    return 0


def run_groups(args: argparse.Namespace) -> int:
    """Print the group tree with the tri-state of each node under a profile."""
    marks = {"all": "[x]", "none": "[ ]", "partial": "[-]"}
    tree = get_tree()
    try:
        selections = apply_profile(tree, load_profile(args.profile, tree))
    except (FileNotFoundError, GroupConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"{marks[all_state(tree, selections).value]} Select All")
    for group in tree.groups:
        state = group_state(tree, selections, group.id)
        print(f"  {marks[state.value]} {group.label} ({group.id})")
        for child in group.children:
            mark = marks["all"] if selections.get(child, False) else marks["none"]
            print(f"      {mark} {child.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
