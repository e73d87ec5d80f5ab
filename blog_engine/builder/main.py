"""CLI entry point for building the static site.

Usage:
    python -m blog_engine.builder.main
    python -m blog_engine.builder.main --content-dir blog/content/post --output blog/public
    python -m blog_engine.builder.main --drafts --no-clean
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from blog_engine.common.config import settings
from blog_engine.common.exceptions import BlogEngineError
from blog_engine.common.logging import setup_logging
from blog_engine.content.loader import load_posts
from blog_engine.linter.checks import lint_posts
from blog_engine.site.config import SiteConfig

from .builder import SiteBuilder

logger = setup_logging(module_name="blog_engine.builder.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build the blog into static HTML")
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=Path(settings.content.content_dir),
        help="Directory holding the Markdown posts",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(settings.build.output_dir),
        help="Directory to write the site into",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(settings.content.site_config_path),
        help="Hugo config.toml with site title, menu and pagination",
    )
    parser.add_argument(
        "--static-dir",
        type=Path,
        default=Path(settings.content.static_dir),
        help="Static files copied verbatim into the output",
    )
    parser.add_argument(
        "--drafts",
        action="store_true",
        default=settings.build.include_drafts,
        help="Include posts marked as draft",
    )
    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep existing files in the output directory",
    )
    parser.add_argument(
        "--skip-lint",
        action="store_true",
        help="Build even when the linter reports errors",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if not args.skip_lint:
            report = lint_posts(args.content_dir)
            for issue in report.errors:
                logger.error(issue.format(root=args.content_dir))
            if not report.ok:
                logger.error("Lint failed: %s", report.summary())
                return 1

        site = SiteConfig.load(args.config)
        posts = load_posts(args.content_dir, include_drafts=args.drafts)
        builder = SiteBuilder(site)
        result = builder.build(
            posts,
            args.output,
            include_drafts=args.drafts,
            clean=settings.build.clean and not args.no_clean,
            static_dir=args.static_dir,
        )
    except (BlogEngineError, FileNotFoundError) as e:
        logger.error("Build failed: %s", e)
        return 1

    print(f"\nBuilt {result.page_count} pages into {result.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
