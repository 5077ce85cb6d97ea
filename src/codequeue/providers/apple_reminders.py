"""Apple Reminders provider: TODOs become reminders in a local list (macOS only)."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from ..models import AppleRemindersSettings, ProjectOption, PublishResult, StatusOption, Task
from .common import publish_concurrently, validate_task_title

if TYPE_CHECKING:
    from ..services.config_service import ConfigService

logger = logging.getLogger(__name__)

SCRIPT_TIMEOUT = 10.0


class AppleScriptError(Exception):
    """osascript failed or timed out."""

    pass


def escape_applescript(value: str) -> str:
    """Escape a value for use inside an AppleScript string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def run_applescript(script: str, timeout: float = SCRIPT_TIMEOUT) -> str:
    """Run a script with osascript and return its trimmed output.

    Raises:
        AppleScriptError: On non-zero exit, missing osascript or timeout
    """
    logger.debug("Executing AppleScript: %s", " ".join(script.split())[:100])
    try:
        result = subprocess.run(
            ["osascript", "-e", script],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise AppleScriptError(
            f"AppleScript timed out after {timeout:.0f}s "
            "(check macOS privacy permissions for Reminders)"
        ) from e
    except OSError as e:
        raise AppleScriptError(f"Cannot run osascript: {e}") from e

    if result.returncode != 0:
        raise AppleScriptError(result.stderr.strip() or f"osascript exited {result.returncode}")
    return result.stdout.strip()


class AppleRemindersProvider:
    """Publishes TODOs as reminders; archiving marks the reminder completed."""

    id = "apple_reminders"
    display_name = "Apple Reminders"
    requires_authentication = False

    def __init__(self, config_service: ConfigService) -> None:
        self._config_service = config_service

    def _get_settings(self) -> AppleRemindersSettings:
        return self._config_service.get_config().apple_reminders

    def authenticate(self) -> bool:
        return True

    def validate_configuration(self) -> bool:
        return bool(self._get_settings().list_name)

    def get_projects(self) -> list[ProjectOption]:
        """List the names of all reminder lists."""
        try:
            output = run_applescript('tell application "Reminders" to get name of every list')
        except AppleScriptError as e:
            logger.error("Failed to fetch Reminders lists: %s", e)
            return []
        names = [name.strip() for name in output.split(",") if name.strip()]
        return [ProjectOption(id=name, label=name, detail="Reminders List") for name in names]

    def get_statuses(self) -> list[StatusOption]:
        # Reminders has no columns
        return [StatusOption(id="default", name="Default")]

    def publish_tasks(self, tasks: list[Task]) -> list[PublishResult]:
        return publish_concurrently(self.publish_task, tasks)

    def publish_task(self, task: Task) -> str | None:
        list_name = self._get_settings().list_name
        if not list_name:
            logger.error("Cannot publish: no Reminders list configured")
            return None

        try:
            title = escape_applescript(validate_task_title(task.title))
            script = (
                'tell application "Reminders"\n'
                f'    tell list "{escape_applescript(list_name)}"\n'
                f'        set newReminder to make new reminder with properties {{name:"{title}"}}\n'
                "        return id of newReminder\n"
                "    end tell\n"
                "end tell"
            )
            reminder_id = run_applescript(script)
        except (AppleScriptError, ValueError) as e:
            logger.error("Failed to publish task %r to Reminders: %s", task.title, e)
            return None

        if not reminder_id:
            logger.error("Reminders returned no ID for task %r", task.title)
            return None
        logger.info("Published task %r as reminder %s", task.title, reminder_id)
        return reminder_id

    def archive_task(self, item_id: str) -> None:
        list_name = self._get_settings().list_name
        if not list_name:
            logger.error("Cannot archive %s: no Reminders list configured", item_id)
            return

        script = (
            'tell application "Reminders"\n'
            f'    tell list "{escape_applescript(list_name)}"\n'
            f'        set completed of (first reminder whose id is "{escape_applescript(item_id)}")'
            " to true\n"
            "    end tell\n"
            "end tell"
        )
        try:
            run_applescript(script)
        except AppleScriptError as e:
            logger.error("Failed to archive reminder %s: %s", item_id, e)
            return
        logger.info("Archived reminder %s", item_id)
