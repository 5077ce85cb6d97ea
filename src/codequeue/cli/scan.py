"""Scan command: sync the TODOs of files with the active provider."""

import logging
from pathlib import Path

from ..providers import ProviderFactory
from ..services import ConfigService, ScanService
from ..state import StateStore
from .output import error, header, info, success, warning

logger = logging.getLogger(__name__)


def run_scan(
    project_root: Path,
    state_file: Path,
    files: list[Path],
    on_save: bool = False,
    dry_run: bool = False,
) -> int:
    """Scan files for TODOs and reconcile them with the active provider.

    Args:
        project_root: Path to project root containing codequeue.yml
        state_file: Persisted state file
        files: Files to scan
        on_save: Treat the scan as triggered by a save (honors auto_scan_on_save)
        dry_run: Only show what would be created and archived

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config_service = ConfigService(project_root)
    if config_service.has_config_error:
        warning(f"{config_service.config_error} (using defaults)")

    if on_save and not config_service.get_scanner_config().auto_scan_on_save:
        logger.info("Auto scan on save is disabled, skipping %d file(s)", len(files))
        return 0

    provider = ProviderFactory(config_service).get_provider()
    service = ScanService(config_service, StateStore(state_file), provider)

    missing = [path for path in files if not path.is_file()]
    for path in missing:
        error(f"Not a file: {path}")
    files = [path for path in files if path.is_file()]

    if dry_run:
        exit_code = _preview(service, files)
        return 1 if missing else exit_code

    if not provider.validate_configuration():
        error(f"{provider.display_name} is not configured")
        info("Run 'codequeue projects' and 'codequeue set' to configure it")
        return 1

    header(f"Syncing TODOs with {provider.display_name}...")
    exit_code = 1 if missing else 0
    for result in service.scan_files(files, on_save=on_save):
        for entry in result.created:
            success(f"Created: {entry.item_id}")
        for item_id in result.archived:
            success(f"Archived: {item_id}")
        for task in result.failed:
            error(f"Failed to create '{task.title}' ({Path(task.file).name}:{task.line})")
        for err in result.archive_errors:
            warning(err)
        if result.failed:
            exit_code = 1
        if result.is_noop:
            info(f"No changes: {result.file}")

    return exit_code


def _preview(service: ScanService, files: list[Path]) -> int:
    header("[DRY RUN] Planned changes:")
    for path in files:
        additions, removals = service.plan_file(path)
        if not additions and not removals:
            info(f"No changes: {path}")
            continue
        for task in additions:
            print(f"  + {path.name}:{task.line} [{task.tag}] {task.title}")
        for entry in removals:
            print(f"  - {path.name}: archive {entry.item_id}")
    return 0
