"""
CLI interface for the GS1 EPC translator.

Usage:
    python -m gs1_translator to-uri "<urn>" [--class-level]
    python -m gs1_translator to-urn "<uri>" [--gcp-length N] [--class-level] [--check-digit]
    python -m gs1_translator validate "<identifier>" [--gcp-length N] [--no-check-digit]
    python -m gs1_translator normalize "<uri>"

Options:
    --json                Output as JSON
    --verbose             Log conversion details to stderr
"""

import argparse
import json
import logging
import sys
from typing import Optional

from .core.converter import (
    CanonicalResult,
    convert_to_digital_link,
    convert_to_digital_link_for_class_level,
    convert_to_urn,
    convert_to_urn_for_class_level,
    to_uri,
    to_urn,
)
from .core.matchers import ValidationContext
from .core.validation import validate, validate_digital_link
from .exceptions import ValidationException
from .json_formatter import error_to_dict, result_to_dict
from .normalizer import normalize_digital_link


def format_result(result: CanonicalResult) -> str:
    """Format a URI to URN result for display."""
    lines = [
        "=" * 60,
        "GS1 Translation Result",
        "=" * 60,
        f"As Captured:  {result.as_captured}",
        f"EPC URN:      {result.as_urn}",
        f"Canonical DL: {result.canonical_dl}",
    ]
    if result.serial is not None:
        lines.append(f"Serial:       {result.serial}")
    lines.append(f"{result.raw_key.upper() + ':':<14}{result.raw_value}")
    return '\n'.join(lines)


def _emit(args: argparse.Namespace, text: str, payload: dict) -> None:
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(text)


def _run_to_uri(args: argparse.Namespace) -> None:
    if args.class_level:
        uri = convert_to_digital_link_for_class_level(args.identifier)
    elif args.instance_level:
        uri = convert_to_digital_link(args.identifier)
    else:
        uri = to_uri(args.identifier)
    _emit(args, uri, result_to_dict(uri, as_captured=args.identifier))


def _run_to_urn(args: argparse.Namespace) -> None:
    if args.class_level:
        result = convert_to_urn_for_class_level(args.identifier, args.gcp_length, args.check_digit)
    elif args.instance_level:
        result = convert_to_urn(args.identifier, args.gcp_length, args.check_digit)
    else:
        result = to_urn(args.identifier, args.gcp_length, args.check_digit)
    _emit(args, format_result(result), result_to_dict(result))


def _run_validate(args: argparse.Namespace) -> None:
    context = ValidationContext(
        gcp_length=args.gcp_length,
        validate_check_digit=not args.no_check_digit,
    )
    identifier = args.identifier
    if identifier.startswith("urn:"):
        validate(identifier, context)
    else:
        identifier = validate_digital_link(identifier, context)
    _emit(args, f"Valid: {identifier}", {"identifier": identifier, "valid": True})


def _run_normalize(args: argparse.Namespace) -> None:
    normalized = normalize_digital_link(args.identifier)
    _emit(args, normalized, {"asCaptured": args.identifier, "normalized": normalized})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gs1_translator',
        description='Translate GS1 identifiers between EPC URN and GS1 Digital Link URI'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log conversion details to stderr'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    to_uri_parser = subparsers.add_parser('to-uri', help='Convert an EPC URN to a Digital Link URI')
    to_uri_parser.add_argument('identifier', help='EPC URN')
    to_uri_parser.set_defaults(handler=_run_to_uri)

    to_urn_parser = subparsers.add_parser('to-urn', help='Convert a Digital Link URI to an EPC URN')
    to_urn_parser.add_argument('identifier', help='GS1 Digital Link URI')
    to_urn_parser.add_argument(
        '--gcp-length',
        type=int,
        default=None,
        help='GS1 Company Prefix length (resolved from the prefix table when omitted)'
    )
    to_urn_parser.add_argument(
        '--check-digit',
        action='store_true',
        help='Reject URIs with a wrong check digit'
    )
    to_urn_parser.set_defaults(handler=_run_to_urn)

    for sub in (to_uri_parser, to_urn_parser):
        level = sub.add_mutually_exclusive_group()
        level.add_argument(
            '--class-level',
            action='store_true',
            help='Force class level conversion'
        )
        level.add_argument(
            '--instance-level',
            action='store_true',
            help='Force instance level conversion'
        )

    validate_parser = subparsers.add_parser('validate', help='Validate an EPC URN or Digital Link URI')
    validate_parser.add_argument('identifier', help='EPC URN or GS1 Digital Link URI')
    validate_parser.add_argument(
        '--gcp-length',
        type=int,
        default=None,
        help='GS1 Company Prefix length for Digital Link URIs'
    )
    validate_parser.add_argument(
        '--no-check-digit',
        action='store_true',
        help='Skip check digit verification'
    )
    validate_parser.set_defaults(handler=_run_validate)

    normalize_parser = subparsers.add_parser('normalize', help='Replace Digital Link short codes with AI codes')
    normalize_parser.add_argument('identifier', help='GS1 Digital Link URI')
    normalize_parser.set_defaults(handler=_run_normalize)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.handler(args)
    except ValidationException as exc:
        if args.json:
            print(json.dumps(error_to_dict(exc), indent=2, ensure_ascii=False))
        else:
            print(exc.message, file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
