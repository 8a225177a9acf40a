"""CLI commands for clustering and generalizing extraction rules."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from rex.xpath import WeightedRule
from rex.xpath.clustering import cluster_rules
from rex.xpath.config import load_generalization_config
from rex.xpath.errors import XPathGeneralizationError
from rex.xpath.generalizer import generalize_xpath_expressions
from rex.xpath.rules import (
    COLLISION_POLICIES,
    generalize_rules,
    generalize_rules_with_support,
    merge_weighted_rules,
)
from rex.xpath.serialization import (
    cluster_to_dict,
    load_rules,
    rule_to_dict,
    weighted_rule_to_dict,
)

__all__ = ["register_commands", "build_parser"]

OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add rule generalization commands to the main CLI parser."""
    parser = subparsers.add_parser(
        "xpath",
        description="Cluster and generalize XPath extraction rules.",
        help="Cluster and generalize XPath extraction rules.",
    )
    _configure_parser(parser)


def build_parser(*, prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cluster and generalize XPath extraction rules.",
        prog=prog,
    )
    _configure_parser(parser)
    return parser


def _configure_parser(parser: argparse.ArgumentParser) -> None:
    subcommands = parser.add_subparsers(dest="xpath_command", metavar="COMMAND")
    subcommands.required = True

    generalize_parser = subcommands.add_parser(
        "generalize",
        help="Generalize raw rules from a JSON or YAML file.",
    )
    generalize_parser.add_argument("rules", type=Path, help="File containing raw extraction rules.")
    generalize_parser.add_argument(
        "--config",
        type=Path,
        help="Path to a generalization YAML config (default: config/generalization.yaml when present).",
    )
    generalize_parser.add_argument(
        "--unweighted",
        action="store_true",
        help="Omit support weights from the output.",
    )
    generalize_parser.add_argument(
        "--on-collision",
        choices=COLLISION_POLICIES,
        help="How to resolve identical generalized rules (overrides configuration).",
    )
    generalize_parser.add_argument(
        "--workers",
        type=int,
        help="Number of threads used to fold clusters (overrides configuration).",
    )
    _add_output_format(generalize_parser)
    generalize_parser.set_defaults(func=generalize_cli)

    cluster_parser = subcommands.add_parser(
        "cluster",
        help="Group raw rules by their tag-only structure.",
    )
    cluster_parser.add_argument("rules", type=Path, help="File containing raw extraction rules.")
    _add_output_format(cluster_parser)
    cluster_parser.set_defaults(func=cluster_cli)

    merge_parser = subcommands.add_parser(
        "merge",
        help="Generalize path expressions given on the command line.",
    )
    merge_parser.add_argument("expressions", nargs="+", help="Path expressions of equal depth.")
    merge_parser.set_defaults(func=merge_cli)


def _add_output_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-format",
        choices=(OUTPUT_TEXT, OUTPUT_JSON),
        default=OUTPUT_TEXT,
        help="Output format (default: text).",
    )


def generalize_cli(args: argparse.Namespace) -> int:
    """Print generalized rules, with support weights unless disabled."""

    try:
        config = load_generalization_config(args.config)
        rules = load_rules(args.rules)
        policy = args.on_collision or config.collision_policy
        workers = args.workers if args.workers is not None else config.max_workers
        weighted = config.weighted and not args.unweighted

        if weighted:
            entries = generalize_rules_with_support(rules, max_workers=workers)
            merged = merge_weighted_rules(entries, on_collision=policy)
            payload: list[dict[str, Any]] = [
                weighted_rule_to_dict(WeightedRule(rule, support)) for rule, support in merged.items()
            ]
        else:
            payload = [rule_to_dict(rule) for rule in generalize_rules(rules, max_workers=workers)]
    except (FileNotFoundError, XPathGeneralizationError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output_format == OUTPUT_JSON:
        print(json.dumps({"input_count": len(rules), "rules": payload}, indent=2))
        return 0

    for item in payload:
        line = f"{item['subject']}\t{item['object']}"
        if "support" in item:
            line = f"{line}\t{item['support']}"
        print(line)
    return 0


def cluster_cli(args: argparse.Namespace) -> int:
    """Print the structural clusters of a rule file."""

    try:
        rules = load_rules(args.rules)
        clusters = cluster_rules(rules)
    except (FileNotFoundError, XPathGeneralizationError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    payload = [cluster_to_dict(cluster) for cluster in clusters]
    if args.output_format == OUTPUT_JSON:
        print(json.dumps(payload, indent=2))
        return 0

    for number, item in enumerate(payload, start=1):
        print(f"Cluster {number} ({item['size']} rules): {item['subject_shape']} -> {item['object_shape']}")
        for member in item["members"]:
            print(f"  {member['subject']}\t{member['object']}")
    return 0


def merge_cli(args: argparse.Namespace) -> int:
    """Print the generalization of the given path expressions."""

    try:
        print(generalize_xpath_expressions(*args.expressions))
    except XPathGeneralizationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0
