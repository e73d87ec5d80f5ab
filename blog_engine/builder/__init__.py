# Builder Module
# Renders posts, listings and taxonomy pages into a static tree

from .builder import SiteBuilder, output_path
from .models import BuildResult

__all__ = [
    "BuildResult",
    "SiteBuilder",
    "output_path",
]
