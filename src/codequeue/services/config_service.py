"""Configuration service for loading and updating codequeue.yml."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..models import CodequeueConfig, ScannerConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Loads codequeue.yml once and writes provider choices back to it.

    A broken file never stops a scan: defaults are used and the problem is
    kept in ``config_error`` for the CLI to report.
    """

    CONFIG_FILE = "codequeue.yml"

    def __init__(self, project_root: Path) -> None:
        self.project_root = project_root
        self._config: CodequeueConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.project_root / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        return self.config_error is not None

    @property
    def config_error(self) -> str | None:
        """Why the file was ignored, if it was."""
        return self._config_error

    def get_config(self) -> CodequeueConfig:
        """Get the cached configuration, reading the file on first use."""
        if self._config is None:
            self._config, self._config_error = self._load_config()
        return self._config

    def get_scanner_config(self) -> ScannerConfig:
        return self.get_config().scanner

    def reload(self) -> None:
        """Drop the cached configuration."""
        self._config = None
        self._config_error = None

    # --- Updates ---

    def set_provider(self, provider_id: str) -> CodequeueConfig:
        """Select the active provider and persist the choice."""
        data = self._read_raw()
        data["provider"] = provider_id
        return self._write_raw(data)

    def set_provider_setting(self, provider_id: str, key: str, value: Any) -> CodequeueConfig:
        """Set one key of a provider section and persist it.

        Raises:
            ValueError: If the provider is unknown or the result is invalid
        """
        if provider_id not in CodequeueConfig.PROVIDER_SECTIONS:
            raise ValueError(f"Unknown provider '{provider_id}'")
        data = self._read_raw()
        section = dict(data.get(provider_id) or {})
        section[key] = value
        data[provider_id] = section
        return self._write_raw(data)

    def _read_raw(self) -> dict[str, Any]:
        if not self.config_path.exists():
            return CodequeueConfig.default().model_dump(exclude_none=True)
        try:
            data = yaml.safe_load(self.config_path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot update {self.CONFIG_FILE}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _write_raw(self, data: dict[str, Any]) -> CodequeueConfig:
        try:
            config = CodequeueConfig(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        self.project_root.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        logger.info("Updated %s", self.config_path)

        self._config = config
        self._config_error = None
        return config

    def _load_config(self) -> tuple[CodequeueConfig, str | None]:
        """Read and validate the file; on any problem return defaults and the reason."""
        if not self.config_path.exists():
            logger.debug("No %s in %s, using defaults", self.CONFIG_FILE, self.project_root)
            return CodequeueConfig.default(), None

        try:
            data = yaml.safe_load(self.config_path.read_text())
        except yaml.YAMLError as e:
            return self._fallback(f"Invalid YAML in {self.CONFIG_FILE}: {e}")

        if data is None:
            return self._fallback(f"{self.CONFIG_FILE} is empty")
        if not isinstance(data, dict):
            return self._fallback(f"{self.CONFIG_FILE} must contain a mapping")

        try:
            config = CodequeueConfig(**data)
        except ValidationError as e:
            return self._fallback(f"Invalid {self.CONFIG_FILE}: {e}")

        logger.info("Loaded %s (provider=%s)", self.config_path, config.provider)
        return config, None

    def _fallback(self, reason: str) -> tuple[CodequeueConfig, str]:
        logger.warning("%s, using defaults", reason)
        return CodequeueConfig.default(), reason
