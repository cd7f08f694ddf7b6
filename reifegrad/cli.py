"""
Command line front end.

Examples::

    reifegrad score CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H
    reifegrad score --scheme reifegrad -m U=F -m D=F -m G=L -m E=N -m V=N --json
    reifegrad xml Reifegrad/U:F/D:F/G:F/E:P/V:N
    reifegrad extract report.docx --scheme cvss31
    reifegrad schemes

Exit status is 0 on success, 2 when the input was rejected (the failure
record is printed) and 1 when an input file could not be read.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from . import config
from .document_processor import DocumentProcessor
from .engine import (
    calculate_from_metrics,
    calculate_from_vector,
    generate_xml_from_metrics,
    generate_xml_from_vector,
)
from .errors import Failure, SchemaError
from .results import ScoreResult
from .schema import Scheme
from .schemes import SCHEMES, get_scheme

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_REJECTED = 2


def parse_metric_options(options: Sequence[str]) -> Dict[str, str]:
    """Turn ``CODE=VALUE`` options into a metric value map."""
    metrics: Dict[str, str] = {}
    for option in options:
        code, sep, value = option.partition("=")
        if not sep or not code:
            raise ValueError(f"expected CODE=VALUE, got {option!r}")
        metrics[code.strip()] = value.strip()
    return metrics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reifegrad",
        description="Score CVSS v3.1 and Reifegrad metric vectors.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_input_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("vector", nargs="?", help="Vector string. Omit to pass discrete --metric values.")
        sub.add_argument("-s", "--scheme", choices=sorted(SCHEMES), help="Scoring scheme.")
        sub.add_argument(
            "-m",
            "--metric",
            action="append",
            default=[],
            metavar="CODE=VALUE",
            help="Discrete metric value, repeatable.",
        )

    score = subparsers.add_parser("score", help="Calculate scores and severities.")
    add_input_arguments(score)
    score.add_argument("--json", action="store_true", help="Print the result record as JSON.")

    xml = subparsers.add_parser("xml", help="Render the scored metrics as XML.")
    add_input_arguments(xml)

    extract = subparsers.add_parser("extract", help="Extract metrics from a Word, PDF or text report and score them.")
    extract.add_argument("file", type=Path, help="Report to read.")
    extract.add_argument("-s", "--scheme", choices=sorted(SCHEMES), help="Scoring scheme.")

    subparsers.add_parser("schemes", help="List the available schemes and their metrics.")
    return parser


def _print_failure(failure: Failure, as_json: bool) -> int:
    if as_json:
        print(json.dumps(failure.to_dict(), indent=2, ensure_ascii=False))
    else:
        detail = ", ".join(failure.error_metrics)
        print(f"error: {failure.error_type.value}" + (f": {detail}" if detail else ""), file=sys.stderr)
    return EXIT_REJECTED


def _print_result(result: ScoreResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return
    print(f"Vector: {result.vector_string}")
    for key, score in result.scores.items():
        print(f"{key.capitalize():<14} {score:>5}  {result.severities[key]}")


def _default_scheme(parser: argparse.ArgumentParser) -> Scheme:
    try:
        return get_scheme(config.DEFAULT_SCHEME)
    except SchemaError as e:
        parser.error(f"REIFEGRAD_SCHEME: {e.args[0]}")


def _run_input_command(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.vector and args.metric:
        parser.error("pass either a vector string or --metric values, not both")
    as_json = getattr(args, "json", False)
    scheme = get_scheme(args.scheme) if args.scheme else None

    if args.vector:
        if args.command == "xml":
            outcome = generate_xml_from_vector(args.vector, scheme)
        else:
            outcome = calculate_from_vector(args.vector, scheme)
    else:
        if not args.metric:
            parser.error("a vector string or at least one --metric value is required")
        try:
            metrics = parse_metric_options(args.metric)
        except ValueError as e:
            parser.error(str(e))
        scheme = scheme or _default_scheme(parser)
        if args.command == "xml":
            outcome = generate_xml_from_metrics(metrics, scheme)
        else:
            outcome = calculate_from_metrics(metrics, scheme)

    if isinstance(outcome, Failure):
        return _print_failure(outcome, as_json)
    if args.command == "xml":
        sys.stdout.write(outcome.xml_string)
    else:
        _print_result(outcome, as_json)
    return EXIT_OK


def _run_extract(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    scheme = get_scheme(args.scheme) if args.scheme else _default_scheme(parser)
    try:
        content = args.file.read_bytes()
    except OSError as e:
        print(f"error: cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    processed = DocumentProcessor(scheme).process_document(content, args.file.name)
    print(json.dumps(processed, indent=2, ensure_ascii=False))
    if not processed["success"]:
        return EXIT_IO_ERROR
    return EXIT_OK if processed["score"]["success"] else EXIT_REJECTED


def _run_schemes() -> int:
    for scheme in SCHEMES.values():
        print(f"{scheme.name}: {scheme.title} ({scheme.version_identifier})")
        for group in scheme.groups:
            kind = "mandatory" if group.mandatory else "optional"
            print(f"  {group.name} ({kind})")
            for metric in group.metrics:
                print(f"    {metric.code:<4} {metric.name:<30} {'/'.join(metric.values)}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "extract":
        return _run_extract(args, parser)
    if args.command == "schemes":
        return _run_schemes()
    return _run_input_command(args, parser)


if __name__ == "__main__":
    raise SystemExit(main())
