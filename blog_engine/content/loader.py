"""Load posts from the content directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from pydantic import ValidationError

from blog_engine.common.config import settings
from blog_engine.common.exceptions import FrontMatterError
from blog_engine.common.logging import setup_logging

from .front_matter import parse_front_matter
from .models import Post

logger = setup_logging(module_name="blog_engine.content.loader")


def iter_post_files(
    content_dir: Path | str,
    template_names: Iterable[str] | None = None,
) -> Iterator[Path]:
    """Yield the Markdown files of a content directory, sorted by name.

    Archetype templates (``_template.md`` by default) are skipped.
    """
    directory = Path(content_dir)
    if not directory.is_dir():
        raise FileNotFoundError(f"Content directory not found: {directory}")

    skip = set(template_names if template_names is not None else settings.content.template_names)
    for path in sorted(directory.glob("*.md")):
        if path.name in skip:
            logger.debug("Skipping template %s", path.name)
            continue
        yield path


def load_post(path: Path | str) -> Post:
    """Read and validate a single post.

    Raises:
        FrontMatterError: If the front matter cannot be parsed or a field
            fails validation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(path, f"file is not valid UTF-8: {e}") from e

    data, body = parse_front_matter(text, path)
    try:
        return Post.from_front_matter(data, body=body, source_path=path)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise FrontMatterError(path, f"invalid front matter: {problems}") from e


def load_posts(
    content_dir: Path | str,
    include_drafts: bool = True,
    template_names: Iterable[str] | None = None,
) -> list[Post]:
    """Load every post in ``content_dir``, newest first.

    The first invalid file aborts the load; run the linter to see all of them.
    """
    posts = []
    for path in iter_post_files(content_dir, template_names):
        post = load_post(path)
        if post.draft and not include_drafts:
            logger.debug("Skipping draft %s", path.name)
            continue
        posts.append(post)

    posts.sort(key=Post.sort_key)
    logger.info("Loaded %d posts from %s", len(posts), content_dir)
    return posts
