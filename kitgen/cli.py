"""CLI entrypoints for kitgen commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_config
from .generator import GenerationError, KitfileGenerator
from .logging import configure_logging, get_logger
from .models import Package
from .serializer import dump_kitfile, write_kitfile

logger = get_logger("cli")


def _add_logging_options(parser: argparse.ArgumentParser, *, subcommand: bool = False) -> None:
    """Add -v/--verbose (repeatable) and --log-file.

    The subcommand copies default to SUPPRESS so flags given before the
    subcommand are not reset by the subparser.
    """
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="verbosity",
        default=argparse.SUPPRESS if subcommand else 0,
        help="Show generation decisions; repeat (-vv) to trace every classified entry.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if subcommand else None,
        help="Also write a full trace of the run to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kitgen",
        description="Generate Kitfile manifests from the contents of a directory.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Generate a Kitfile for the contents of a directory.",
        description=(
            "Examine the contents of a directory and generate a basic Kitfile based on "
            "common file formats. Files whose type cannot be determined are included "
            "in a code section."
        ),
    )
    _add_logging_options(init_parser, subcommand=True)
    init_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to scan (defaults to current directory).",
    )
    init_parser.add_argument("--name", help="Package name for the Kitfile.")
    init_parser.add_argument("--desc", help="Package description for the Kitfile.")
    init_parser.add_argument("--version", dest="package_version", help="Package version.")
    init_parser.add_argument(
        "--author",
        action="append",
        dest="authors",
        default=None,
        help="Package author; may be repeated.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing Kitfile.",
    )
    init_parser.add_argument(
        "--print",
        action="store_true",
        dest="print_only",
        help="Print the generated Kitfile without writing it.",
    )

    return parser


def _resolve_package(base: Package | None, args: argparse.Namespace) -> Package | None:
    """Merge CLI flags over the package block from .kitgen.yml."""
    package = replace(base, authors=list(base.authors)) if base is not None else Package()
    if args.name:
        package.name = args.name
    if args.desc:
        package.description = args.desc
    if args.package_version:
        package.version = args.package_version
    if args.authors:
        package.authors = list(args.authors)
    if not any(
        (package.name, package.version, package.description, package.license, package.authors)
    ):
        return None
    return package


def run_init(args: argparse.Namespace) -> str:
    """Generate a Kitfile for ``args.path``; return the rendered YAML."""
    directory = Path(args.path).expanduser()
    config = load_config(directory)
    package = _resolve_package(config.package, args)

    generator = KitfileGenerator(catchall_threshold=config.catchall_threshold)
    kitfile = generator.generate(str(directory), package)
    rendered = dump_kitfile(kitfile)

    if args.print_only:
        print(rendered, end="")
        return rendered

    kitfile_path = write_kitfile(kitfile, directory, overwrite=bool(args.force))
    logger.info("Generated Kitfile:\n\n%s", rendered)
    logger.info("Saved to path '%s'", _relativize(kitfile_path))
    return rendered


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for kitgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbosity=args.verbosity, log_file=args.log_file)

    if args.command == "init":
        try:
            run_init(args)
        except FileExistsError as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except GenerationError as exc:
            parser.exit(1, f"Error generating Kitfile: {exc}\nRun with -v for more details.\n")
        except OSError as exc:
            parser.exit(1, f"Failed to write Kitfile: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
