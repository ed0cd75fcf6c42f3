#!/usr/bin/env python3
"""
Command-line interface for jreflect - reflective accessor generator for Java.
"""

import argparse
import logging
import sys
from pathlib import Path

from .types import JReflectError


def _parse_param(value: str) -> tuple[str, str]:
    """TYPE:NAME -> (TYPE, NAME)"""
    jvm_type, sep, name = value.rpartition(":")
    if not sep or not jvm_type or not name:
        raise argparse.ArgumentTypeError(f"expected TYPE:NAME, got {value!r}")
    return jvm_type, name


def parse_command(args):
    """Parse files holding one Java method each and output the AST as JSON."""
    from .parser import MethodParser

    parser = MethodParser()

    for source_file in args.files:
        path = Path(source_file)
        if not path.exists():
            print(f"Error: File not found: {source_file}", file=sys.stderr)
            sys.exit(1)

        try:
            method = parser.parse_file(str(path))
            print(method.to_json())
        except JReflectError as e:
            print(f"Error parsing {source_file}: {e}", file=sys.stderr)
            sys.exit(1)


def generate_command(args):
    """Generate a reflective accessor method."""
    from .builder import AccessorDraft
    from .factory import InsertionContext, ParsingNodeFactory

    draft = AccessorDraft(args.name).set_static(args.static).set_return_type(args.return_type)
    for jvm_type, name in args.param:
        draft.add_parameter(jvm_type, name)

    if args.command == "field":
        draft.target_field(args.owner, args.member)
    elif args.command == "set-field":
        draft.target_field_for_write(args.owner, args.member)
    elif args.command == "method":
        draft.target_method(args.owner, args.member)
    else:
        draft.target_constructor(args.owner)

    context = InsertionContext(args.context) if args.context else None
    try:
        generated = draft.build(ParsingNodeFactory(), context)
    except JReflectError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.ast:
        print(generated.node.to_json())
    else:
        print(generated.text, end="")


def _add_generate_parser(subparsers, command: str, help_text: str, member: bool = True):
    sub = subparsers.add_parser(command, help=help_text)
    sub.add_argument(
        "--owner",
        required=True,
        help="Binary name of the class declaring the member (e.g. com.example.Outer$Inner)",
    )
    if member:
        sub.add_argument(
            "--member",
            required=True,
            help="Name of the field or method to access",
        )
    sub.add_argument(
        "--name",
        required=True,
        help="Name of the generated method",
    )
    sub.add_argument(
        "--return-type",
        default="void",
        help="Return type of the generated method (default: void)",
    )
    sub.add_argument(
        "--static",
        action="store_true",
        help="Generate a static method",
    )
    sub.add_argument(
        "-p", "--param",
        action="append",
        default=[],
        type=_parse_param,
        metavar="TYPE:NAME",
        help="Parameter of the generated method, in order (repeatable)",
    )
    sub.add_argument(
        "--context",
        help="Class the generated method will be inserted into",
    )
    sub.add_argument(
        "--ast",
        action="store_true",
        help="Print the parsed method as JSON instead of the source text",
    )
    sub.set_defaults(func=generate_command)
    return sub


def main(argv=None):
    """Main entry point for jreflect CLI."""
    parser = argparse.ArgumentParser(
        prog="jreflect",
        description="Generate Java methods that access inaccessible members through reflection",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse Java method declarations and output AST as JSON",
    )
    parse_parser.add_argument(
        "files",
        nargs="+",
        help="Files each holding one Java method declaration",
    )
    parse_parser.set_defaults(func=parse_command)

    _add_generate_parser(subparsers, "field", "Generate an accessor reading a field")
    _add_generate_parser(subparsers, "set-field", "Generate an accessor writing a field")
    _add_generate_parser(subparsers, "method", "Generate an accessor invoking a method")
    _add_generate_parser(subparsers, "constructor", "Generate an accessor invoking a constructor", member=False)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
