"""codequeue - sync TODO comments to external task trackers."""

__version__ = "0.1.0"
