# Common utilities and shared modules
"""
Shared components used by every part of the blog engine:
- Project configuration
- Logging configuration
- Exception hierarchy
"""

from .config import settings, PROJECT_ROOT, BLOG_DIR, Settings
from .exceptions import (
    BlogEngineError,
    BuildError,
    ConfigurationError,
    ContentError,
    FrontMatterError,
)
from .logging import setup_logging, setup_access_log

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "BLOG_DIR",
    "BlogEngineError",
    "BuildError",
    "ConfigurationError",
    "ContentError",
    "FrontMatterError",
    "setup_logging",
    "setup_access_log",
]
