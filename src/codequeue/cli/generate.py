"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models import CodequeueConfig
from .output import info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = "codequeue.yml"

# Header comments for generated file
CONFIG_HEADER = """\
# codequeue Configuration
#
# provider: Where TODOs are published
#   - github: GitHub Projects (token from GITHUB_TOKEN or 'gh auth token')
#   - trello: Trello (api_key below, token from TRELLO_TOKEN)
#   - apple_reminders: Apple Reminders (macOS)
#
# scanner:
#   snippet_extraction_enabled: Attach the code following a TODO
#   snippet_line_count: Maximum number of snippet lines (0-50)
#   auto_scan_on_save: Sync when 'codequeue scan --on-save' is called
#
# body_template placeholders (GitHub):
#   ${file}, ${line}, ${code_snippet}, ${lang}, ${author}
#
# TODO tags matching a GitHub Priority option set that priority:
#   // TODO(high): handle timeouts

"""


def generate_config_yaml() -> str:
    """Generate YAML config from the default CodequeueConfig model."""
    config_dict = CodequeueConfig.default().model_dump(exclude_none=True)
    yaml_content = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Generate default configuration.

    Args:
        project_root: Path to project root where codequeue.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do)
    """
    config_path = project_root / CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    project_root.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_config_yaml())
    success(f"Generated config: {config_path}")
    return 0
