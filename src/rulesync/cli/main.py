"""rulesync command line entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from rulesync import __version__
from rulesync.config.settings import get_settings
from rulesync.handlers import PROMETHEUS_RULE_GROUP_KIND
from rulesync.logging import bind_context, configure_logging
from rulesync.resources.io import FILETYPES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rulesync",
        description="Sync Prometheus rule groups with a Mimir/Cortex ruler",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Log level (default: RULESYNC_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List uids of remote resources")
    list_parser.add_argument("--output", choices=["text", "json"], default="text", help="Output format")

    get_parser = subparsers.add_parser("get", help="Print a remote resource by uid")
    get_parser.add_argument("uid", help="Resource uid, e.g. <namespace>.<group> for rule groups")
    get_parser.add_argument("--kind", default=PROMETHEUS_RULE_GROUP_KIND, help="Resource kind")
    get_parser.add_argument("--output", "-o", choices=FILETYPES, default="yaml", help="Output format")

    pull_parser = subparsers.add_parser("pull", help="Download all remote resources into a directory")
    pull_parser.add_argument("directory", help="Target directory")
    pull_parser.add_argument("--format", dest="filetype", choices=FILETYPES, default="yaml", help="File format")

    apply_parser = subparsers.add_parser("apply", help="Create or update resources from files")
    apply_parser.add_argument("path", help="Resource file or directory")
    apply_parser.add_argument("--dry-run", action="store_true", help="Show what would change without pushing")

    validate_parser = subparsers.add_parser("validate", help="Validate resource files locally")
    validate_parser.add_argument("path", help="Resource file or directory")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    configure_logging(args.log_level or get_settings().log_level)
    bind_context(command=args.command)

    if args.command == "list":
        from rulesync.cli.remote import list_command

        sys.exit(list_command(output_format=args.output))

    if args.command == "get":
        from rulesync.cli.remote import get_command

        sys.exit(get_command(args.uid, kind=args.kind, output_format=args.output))

    if args.command == "pull":
        from rulesync.cli.remote import pull_command

        sys.exit(pull_command(args.directory, filetype=args.filetype))

    if args.command == "apply":
        from rulesync.cli.apply import apply_command

        sys.exit(apply_command(args.path, dry_run=args.dry_run))

    if args.command == "validate":
        from rulesync.cli.apply import validate_command

        sys.exit(validate_command(args.path))


if __name__ == "__main__":
    main()
