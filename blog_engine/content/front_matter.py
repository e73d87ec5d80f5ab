"""Front matter parsing for Markdown posts.

Hugo accepts YAML front matter fenced by ``---`` and TOML fenced by ``+++``.
Both are supported here; the body is everything after the closing fence.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from blog_engine.common.exceptions import FrontMatterError

YAML_FENCE = "---"
TOML_FENCE = "+++"

_FENCES = {YAML_FENCE: "yaml", TOML_FENCE: "toml"}


def split_front_matter(
    text: str,
    path: Path | str | None = None,
) -> tuple[str, str, str]:
    """Split a post into (format, raw front matter, body).

    Raises:
        FrontMatterError: If the file has no front matter block or the block
            is never closed.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines:
        raise FrontMatterError(path, "file is empty")

    fence = lines[0].strip()
    if fence not in _FENCES:
        raise FrontMatterError(path, "missing front matter block")

    for index in range(1, len(lines)):
        if lines[index].strip() == fence:
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            return _FENCES[fence], raw, body.lstrip("\r\n")

    raise FrontMatterError(path, f"front matter block opened with {fence!r} is never closed")


def parse_front_matter(
    text: str,
    path: Path | str | None = None,
) -> tuple[dict, str]:
    """Parse front matter into a dict and return it with the Markdown body."""
    fmt, raw, body = split_front_matter(text, path)

    try:
        if fmt == "yaml":
            data = yaml.safe_load(raw)
        else:
            data = tomllib.loads(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(path, f"invalid YAML front matter: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise FrontMatterError(path, f"invalid TOML front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            path, f"front matter must be a mapping, got {type(data).__name__}"
        )
    return data, body


def dump_front_matter(data: dict, body: str = "") -> str:
    """Render a YAML front matter block followed by ``body``."""
    yaml_txt = yaml.safe_dump(
        data, allow_unicode=True, sort_keys=False, default_flow_style=False, width=1000
    )
    return f"{YAML_FENCE}\n{yaml_txt}{YAML_FENCE}\n\n{body}"
