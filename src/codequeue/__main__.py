"""CLI entry point for codequeue."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="codequeue",
        description="Sync TODO comments with GitHub Projects, Trello or Apple Reminders",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Path to project root containing codequeue.yml (default: current directory)",
    )
    parser.add_argument(
        "--state-file",
        type=Path,
        default=None,
        help="File holding the published TODO state (default: ~/.codequeue/state.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan files and sync their TODOs")
    scan.add_argument("files", nargs="+", type=Path, help="Files to scan")
    scan.add_argument(
        "--on-save",
        action="store_true",
        help="Triggered by a save: skip when auto_scan_on_save is disabled",
    )
    scan.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created and archived without syncing",
    )

    subparsers.add_parser("generate", help="Generate default codequeue.yml and exit")
    subparsers.add_parser("providers", help="List providers")

    use = subparsers.add_parser("use", help="Select the active provider")
    use.add_argument("provider", help="Provider ID (github, trello, apple_reminders)")

    subparsers.add_parser("projects", help="List projects/boards/lists of the active provider")
    subparsers.add_parser("statuses", help="List statuses/columns of the active provider")

    set_cmd = subparsers.add_parser("set", help="Set a provider setting")
    set_cmd.add_argument("provider", help="Provider ID")
    set_cmd.add_argument("key", help="Setting name, e.g. project_id")
    set_cmd.add_argument("value", help="Setting value")

    set_status = subparsers.add_parser("set-status", help="Default GitHub Status for new items")
    set_status.add_argument("name", help="Status option name, e.g. 'Todo'")

    subparsers.add_parser("sync-priorities", help="Store the GitHub Priority field options")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.state_file:
        settings_kwargs["state_file"] = args.state_file
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    setup_logging(settings.verbose, settings.log_file)

    root = settings.project_root

    if args.command == "scan":
        from .cli.scan import run_scan

        exit_code = run_scan(
            root,
            settings.state_file,
            args.files,
            on_save=args.on_save,
            dry_run=args.dry_run,
        )
        raise SystemExit(exit_code)

    if args.command == "generate":
        from .cli.generate import run_generate

        raise SystemExit(run_generate(root))

    from .cli import configure

    if args.command == "providers":
        exit_code = configure.run_providers(root)
    elif args.command == "use":
        exit_code = configure.run_use(root, args.provider)
    elif args.command == "projects":
        exit_code = configure.run_projects(root)
    elif args.command == "statuses":
        exit_code = configure.run_statuses(root)
    elif args.command == "set":
        exit_code = configure.run_set(root, args.provider, args.key, args.value)
    elif args.command == "set-status":
        exit_code = configure.run_set_status(root, args.name)
    else:
        exit_code = configure.run_sync_priorities(root)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
