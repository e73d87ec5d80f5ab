# Content Module
# Markdown posts with YAML or TOML front matter

from .front_matter import dump_front_matter, parse_front_matter, split_front_matter
from .loader import iter_post_files, load_post, load_posts
from .models import SUMMARY_DIVIDER, Post, markdown_to_text, urlize

__all__ = [
    "SUMMARY_DIVIDER",
    "Post",
    "dump_front_matter",
    "iter_post_files",
    "load_post",
    "load_posts",
    "markdown_to_text",
    "parse_front_matter",
    "split_front_matter",
    "urlize",
]
