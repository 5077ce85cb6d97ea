"""Service layer."""

from .config_service import ConfigService
from .scan_service import ScanService, document_id

__all__ = [
    "ConfigService",
    "ScanService",
    "document_id",
]
