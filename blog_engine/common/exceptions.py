"""
Custom exception classes for the blog engine.

Content problems are authoring mistakes; they carry the offending file so
the linter and the builder can point at it.
"""

from __future__ import annotations

from pathlib import Path


class BlogEngineError(Exception):
    """Base exception for all blog engine errors."""
    pass


class ConfigurationError(BlogEngineError):
    """Raised when the site configuration cannot be read or is invalid."""
    pass


# =============================================================================
# Content Errors
# =============================================================================

class ContentError(BlogEngineError):
    """Base exception for post content errors."""
    pass


class FrontMatterError(ContentError):
    """Raised when a post's front matter is missing, malformed or invalid."""

    def __init__(self, path: Path | str | None, message: str):
        self.path = Path(path) if path is not None else None
        self.message = message
        location = f"{self.path}: " if self.path else ""
        super().__init__(f"{location}{message}")


# =============================================================================
# Build Errors
# =============================================================================

class BuildError(BlogEngineError):
    """Raised when the static site cannot be written."""
    pass
