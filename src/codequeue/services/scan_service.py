"""Scan service: turns a document save into a reconciliation pass."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from ..models import ReconcileResult, Task, TaskEntry
from ..scanner import extract_tasks
from ..sync import Reconciler

if TYPE_CHECKING:
    from ..providers.protocol import TaskProvider
    from ..state.store import StateStoreProtocol
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


def document_id(path: Path) -> str:
    """Stable identifier of a file: its resolved absolute path."""
    return str(path.resolve())


class ScanService:
    """Service for scanning documents and syncing their TODOs."""

    def __init__(
        self,
        config_service: ConfigService,
        store: StateStoreProtocol,
        provider: TaskProvider,
    ) -> None:
        """Initialize the scan service.

        Args:
            config_service: Configuration service for scanner settings
            store: Persisted state of published TODOs
            provider: Active task provider
        """
        self._config_service = config_service
        self._reconciler = Reconciler(store, provider)

    def extract(self, file: str, lines: Iterable[str]) -> list[Task]:
        """Extract tasks using the configured snippet settings."""
        scanner = self._config_service.get_scanner_config()
        return extract_tasks(
            lines,
            file,
            snippet_enabled=scanner.snippet_extraction_enabled,
            snippet_line_count=scanner.snippet_line_count,
        )

    def scan_text(self, file: str, lines: Iterable[str]) -> ReconcileResult:
        """Scan text already held by the caller and reconcile it."""
        tasks = self.extract(file, lines)
        return self._reconciler.reconcile(file, tasks)

    def scan_file(self, path: Path, on_save: bool = False) -> ReconcileResult | None:
        """Scan a file and reconcile its TODOs.

        Args:
            path: File to scan
            on_save: Whether this scan was triggered by a save; such scans
                are skipped when auto_scan_on_save is disabled

        Returns:
            The reconciliation result, or None if the scan was skipped
        """
        if on_save and not self._config_service.get_scanner_config().auto_scan_on_save:
            logger.debug("Auto scan on save disabled, skipping %s", path)
            return None

        file = document_id(path)
        logger.info("Scanning %s", file)
        with path.open(encoding="utf-8", errors="replace") as f:
            result = self.scan_text(file, f)

        if result.not_configured:
            logger.info("Provider not configured, %s was not synced", file)
        else:
            logger.info(
                "Synced %s: %d created, %d archived, %d failed",
                file,
                result.created_count,
                result.archived_count,
                len(result.failed),
            )
        return result

    def scan_files(self, paths: list[Path], on_save: bool = False) -> list[ReconcileResult]:
        """Scan several files; one failing file does not stop the others."""
        results: list[ReconcileResult] = []
        for path in paths:
            try:
                result = self.scan_file(path, on_save=on_save)
            except OSError as e:
                logger.error("Failed to scan %s: %s", path, e)
                continue
            if result is not None:
                results.append(result)
        return results

    def plan_file(self, path: Path) -> tuple[list[Task], list[TaskEntry]]:
        """Preview additions and removals for a file without syncing."""
        file = document_id(path)
        with path.open(encoding="utf-8", errors="replace") as f:
            tasks = self.extract(file, f)
        return self._reconciler.plan(file, tasks)
