# Web Server Module
# Serves the built site with gzip, access logging and Prometheus metrics

from .app import create_app, create_metrics_app, format_access_line, serve_from_memory
from .health import VersionInfo, version_info
from .memory import FileData, MemoryStore
from .metrics import record_metrics
from .paths import sanitize_path

__all__ = [
    "FileData",
    "MemoryStore",
    "VersionInfo",
    "create_app",
    "create_metrics_app",
    "format_access_line",
    "record_metrics",
    "sanitize_path",
    "serve_from_memory",
    "version_info",
]
