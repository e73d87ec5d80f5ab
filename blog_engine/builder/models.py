"""Data models for the site builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class BuildResult:
    """What a build wrote."""
    output_dir: Path
    pages: list[str] = field(default_factory=list)  # site paths, e.g. "/post/foo/"
    post_count: int = 0
    skipped_drafts: int = 0
    static_files: int = 0
    # output file -> site path of the page that wrote it; static copies are not tracked
    written: dict[Path, str] = field(default_factory=dict, repr=False)

    @property
    def page_count(self) -> int:
        return len(self.pages)
