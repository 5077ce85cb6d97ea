"""Process-level settings, read from CODEQUEUE_* environment variables.

Per-project options (provider, scanner, body template) live in
codequeue.yml instead; see services.config_service.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATE_DIR = ".codequeue"
DEFAULT_STATE_FILE = "state.yaml"


def _default_state_file() -> Path:
    return Path.home() / DEFAULT_STATE_DIR / DEFAULT_STATE_FILE


class Settings(BaseSettings):
    """Where to look for configuration and state, and how much to log."""

    model_config = SettingsConfigDict(env_prefix="CODEQUEUE_")

    # Directory holding codequeue.yml; relative paths in item bodies start here
    project_root: Path = Field(default=Path())

    # Persisted hash -> item ID entries for all scanned files
    state_file: Path = Field(default_factory=_default_state_file)

    # 0 = silent, 1 = INFO, 2+ = DEBUG
    verbose: int = Field(default=0, ge=0)

    log_file: Path | None = None
