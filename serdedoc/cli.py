"""Command line interface: list structs or generate documentation for them."""

from __future__ import annotations

import argparse
import sys

from .extract import ExtractError, process_path
from .generators import GeneratorConfig, get_generator
from .model import Context

_VERSION = "0.1.0"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-serde-doc",
        usage="cargo serde-doc [OPTIONS] <COMMAND> [ARGS]",
        description="A cargo extension CLI for generating documentation for serde structs",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument(
        "-m", "--manifest-path",
        default=".",
        help="Path to the Cargo.toml file or directory containing it",
    )
    commands = parser.add_subparsers(dest="command", metavar="<COMMAND>", required=True)
    commands.add_parser("list", help="List available serde structs")
    gen = commands.add_parser("gen", help="Generate files using a generator")
    gen.add_argument("generator", help="Name of the generator to use")
    gen.add_argument("-o", "--output", help="Destination path for the generated files")
    gen.add_argument(
        "-s", "--structs", action="append",
        help="Structs to generate; all structs if not given",
    )
    gen.add_argument(
        "-f", "--files", action="append",
        help="Files to be included; all files if not given",
    )
    return parser


def _load(manifest_path: str) -> Context:
    ctx = Context()
    process_path(ctx, manifest_path)
    return ctx


def _handle_list(args: argparse.Namespace) -> None:
    for unit in _load(args.manifest_path).iter_structs():
        print(unit.name)


def _handle_gen(args: argparse.Namespace) -> None:
    ctx = _load(args.manifest_path)
    generator = get_generator(args.generator)
    config = GeneratorConfig(output=args.output, structs=args.structs, files=args.files)
    generator.generate(ctx, config)


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    args_list = list(sys.argv[1:] if argv is None else argv)
    if args_list[:1] == ["serde-doc"]:
        del args_list[0]
    args = _build_parser().parse_args(args_list)
    try:
        if args.command == "list":
            _handle_list(args)
        else:
            _handle_gen(args)
    except (ExtractError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())