"""CLI entry point for content linting.

Usage:
    python -m blog_engine.linter.main
    python -m blog_engine.linter.main --content-dir blog/content/post --fail-on-draft
    python -m blog_engine.linter.main --drafts-only
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from blog_engine.common.config import settings
from blog_engine.common.logging import setup_logging

from .checks import find_drafts, lint_posts

logger = setup_logging(module_name="blog_engine.linter.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check blog posts for front matter problems")
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=Path(settings.content.content_dir),
        help="Directory holding the Markdown posts",
    )
    parser.add_argument(
        "--fail-on-draft",
        action="store_true",
        help="Treat draft posts as errors",
    )
    parser.add_argument(
        "--drafts-only",
        action="store_true",
        help="Only report posts marked as draft",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.content_dir.is_dir():
        logger.error("Content directory not found: %s", args.content_dir)
        return 2

    if args.drafts_only:
        print("Checking for draft content")
        drafts = find_drafts(args.content_dir)
        if not drafts:
            print("No draft content found")
            return 0
        print("Draft content found")
        for path in drafts:
            print(f"  {path.name}")
        return 1 if args.fail_on_draft else 0

    report = lint_posts(args.content_dir, fail_on_draft=args.fail_on_draft)
    for issue in report.issues:
        print(issue.format(root=args.content_dir))
    print(report.summary())
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
