#!/usr/bin/env python3
"""
Scratch 2 project statistics

Prints, for the stage and every sprite of an .sb2 project, the number of
scripts, comments, sounds, costumes, variables and lists, and how many
blocks of each palette category the scripts use.

Usage:
    python analyze.py Project.sb2
    python analyze.py project.json --usage
    python analyze.py Project.sb2 --json
"""

import argparse
import json
import sys
from typing import List, Optional

from sb2stats.categories import BlockCategory
from sb2stats.diagnostics import DiagnosticCollector
from sb2stats.errors import AnalyzerError
from sb2stats.project_io import ProjectReport, analyze_project_file
from sb2stats.sprite import SpriteRecord


verbose_mode = False


def error(msg: str, detail: str = "") -> None:
    """Print an error message and exit."""
    print(f"Error: {msg}", file=sys.stderr)
    if verbose_mode and detail:
        print(f"  Detail: {detail}", file=sys.stderr)
    sys.exit(1)


def format_record(record: SpriteRecord, show_usage: bool = False) -> List[str]:
    lines = [
        f"{record.name}",
        f"  scripts: {record.script_count}  comments: {record.script_comment_count}"
        f"  sounds: {record.sound_count}  costumes: {record.costume_count}"
        f"  variables: {record.variable_count}  lists: {record.list_count}",
    ]
    used = [(category, count) for category, count in record.block_counts.items() if count]
    if used:
        lines.append("  blocks: " + ", ".join(f"{category.value} {count}" for category, count in used))
    else:
        lines.append("  blocks: none")
    if show_usage:
        for name in record.variables:
            lines.append(f"  variable '{name}': used {record.variable_usage_count(name)}")
        for name in record.lists:
            lines.append(f"  list '{name}': used {record.list_usage_count(name)}")
    return lines


def format_report(report: ProjectReport, show_usage: bool = False) -> str:
    lines: List[str] = []
    for record in report.targets:
        lines.extend(format_record(record, show_usage))
        lines.append("")
    totals = report.category_totals()
    lines.append("Total blocks: " + str(sum(totals.values())))
    for category in BlockCategory:
        lines.append(f"  {category.value}: {totals[category]}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Count scripts, assets and blocks by category in a Scratch 2 project.")
    parser.add_argument("input", help="Path to the .sb2 project or its project.json")
    parser.add_argument("--usage", action="store_true", help="Show how often each variable and list is mentioned")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show diagnostics and error details")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    global verbose_mode
    args = build_parser().parse_args(argv)
    verbose_mode = args.verbose

    collector = DiagnosticCollector()
    try:
        report = analyze_project_file(args.input, collector=collector)
    except AnalyzerError as e:
        error(e.message, e.detail)
        return

    if args.json:
        print(json.dumps(report.to_dict(), indent=4))
    else:
        print(format_report(report, show_usage=args.usage))

    if verbose_mode and collector.all_diagnostics:
        print()
        collector.print_all()
        print()
        print(f"Analysis completed with {collector.summary()}")


if __name__ == "__main__":
    main()
