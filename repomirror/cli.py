"""CLI entrypoints for repomirror commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .catalog import read_catalog, verify_catalog
from .config import ConfigError, load_config
from .errors import RepoMirrorError
from .logging import configure_logging, get_logger
from .pipeline import MirrorPipeline


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_location_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Mirror destination directory (defaults to <path>/mirror_repo).",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog file location (defaults to <path>/repo_metadata.json).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repomirror",
        description="Produce an annotated, filtered mirror of a repository plus a file catalog.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mirror_parser = subparsers.add_parser(
        "mirror",
        help="Build the mirror tree and catalog for a repository.",
    )
    _add_verbose_option(mirror_parser, suppress_default=True)
    _add_location_options(mirror_parser)
    mirror_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Walk the repository and report counts without writing anything.",
    )

    verify_parser = subparsers.add_parser(
        "verify",
        help="Check that every catalog entry resolves to a mirrored file.",
    )
    _add_verbose_option(verify_parser, suppress_default=True)
    _add_location_options(verify_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repomirror commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbose = bool(args.verbose)
    try:
        configure_logging(verbose=verbose, log_file=args.log_file)
    except RepoMirrorError as exc:
        parser.exit(1, f"repomirror: {exc}\n")
    logger = get_logger("cli")

    if args.command == "mirror":
        try:
            result = MirrorPipeline().run(
                args.path,
                destination=args.output,
                catalog_path=args.catalog,
                dry_run=bool(getattr(args, "dry_run", False)),
            )
        except (RepoMirrorError, ConfigError) as exc:
            logger.debug("Mirror run aborted", exc_info=True)
            parser.exit(1, f"repomirror mirror failed: {exc}\nRun with --verbose for more details.\n")
        context = result.context
        if result.dry_run:
            print(f"{context.processed} files would be mirrored ({context.skipped} skipped, dry-run)")
        else:
            print(
                f"Mirrored {context.processed} files into {_relativize(result.mirror_root)} "
                f"({context.skipped} skipped); catalog at {_relativize(result.catalog_path)}"
            )
    elif args.command == "verify":
        try:
            root = Path(args.path).expanduser().resolve()
            config = load_config(root)
            mirror_root = Path(args.output).expanduser().resolve() if args.output else config.mirror_path
            catalog_path = Path(args.catalog).expanduser().resolve() if args.catalog else config.catalog_path
            catalog = read_catalog(catalog_path)
        except (OSError, ValueError, ConfigError) as exc:
            parser.exit(1, f"repomirror verify failed: {exc}\n")
        missing = verify_catalog(catalog, mirror_root)
        if missing:
            for path in missing:
                print(f"missing: {path}")
            parser.exit(1, f"{len(missing)} catalog entries do not resolve under {mirror_root}\n")
        print(f"Catalog OK: {len(catalog.metadata)} entries resolve under {_relativize(mirror_root)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
