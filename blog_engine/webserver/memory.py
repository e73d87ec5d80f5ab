"""In-memory copy of the built site.

Every file under the webroot is read once at startup and served from a dict,
keyed by its URL path. Directories that hold an ``index.html`` are also
stored under their trailing-slash path.
"""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from blog_engine.common.logging import setup_logging

logger = setup_logging(module_name="blog_engine.webserver.memory")

DEFAULT_CONTENT_TYPE = "application/octet-stream"
INDEX_FILE = "index.html"


def guess_content_type(path: str) -> str:
    content_type, _ = mimetypes.guess_type(path)
    if content_type is None:
        return DEFAULT_CONTENT_TYPE
    if content_type.startswith("text/") or content_type in (
        "application/javascript",
        "application/json",
        "application/xml",
        "image/svg+xml",
    ):
        return f"{content_type}; charset=utf-8"
    return content_type


@dataclass
class FileData:
    """A single cached file."""
    content_type: str
    content: bytes
    mod_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def etag(self) -> str:
        return f'"{int(self.mod_time.timestamp())}"'


class MemoryStore:
    """URL path → file contents, loaded once from a webroot."""

    def __init__(self, files: dict[str, FileData] | None = None):
        self.files: dict[str, FileData] = files or {}

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, path: str) -> bool:
        return path in self.files

    @classmethod
    def load(cls, root: Path | str) -> MemoryStore:
        """Read every file below ``root``.

        Raises:
            FileNotFoundError: If ``root`` is not a directory.
            OSError: If a file cannot be read.
        """
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Web root not found: {root}")

        store = cls()
        loaded_at = datetime.now(timezone.utc)

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            directory = Path(dirpath)
            rel_dir = directory.relative_to(root).as_posix()
            url_dir = "/" if rel_dir == "." else f"/{rel_dir}/"

            if INDEX_FILE in filenames:
                logger.debug("Directory %s loaded with index.html", url_dir)
            else:
                logger.debug("Directory %s does not contain an index.html", url_dir)

            for name in sorted(filenames):
                file_path = directory / name
                content = file_path.read_bytes()
                data = FileData(
                    content_type=guess_content_type(name),
                    content=content,
                    mod_time=loaded_at,
                )
                store.files[url_dir + name] = data
                if name == INDEX_FILE:
                    store.files[url_dir] = data

        logger.info("Loaded %d paths into memory from %s", len(store), root)
        return store

    def lookup(self, path: str) -> FileData | None:
        """Find the file for a request path.

        A trailing slash means the directory's index.html; a bare directory
        path falls back to ``path + "/index.html"``.
        """
        if path.endswith("/"):
            path += INDEX_FILE

        data = self.files.get(path)
        if data is None and not path.endswith("/" + INDEX_FILE):
            data = self.files.get(path + "/" + INDEX_FILE)
        return data
