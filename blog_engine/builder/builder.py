"""Static site builder: posts in, HTML tree out.

Orchestrates the complete flow:
posts → TaxonomyIndex → paginate → TemplateRenderer → files under output_dir

Usage:
    builder = SiteBuilder(SiteConfig.load("blog/config.toml"))
    result = builder.build(load_posts("blog/content/post"), Path("blog/public"))
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable

from blog_engine.common.exceptions import BuildError
from blog_engine.common.logging import setup_logging
from blog_engine.content.models import Post
from blog_engine.renderer import TemplateRenderer
from blog_engine.site.config import SiteConfig
from blog_engine.taxonomy import TAXONOMIES, TaxonomyIndex, paginate

from .models import BuildResult

logger = setup_logging(module_name="blog_engine.builder")


class SiteBuilder:
    """Writes the whole site for a set of posts.

    Steps:
    1. Drop drafts (unless included)
    2. Write one page per post at its permalink
    3. Write the paginated home listing
    4. Write taxonomy overviews and term pages
    5. Write sitemap.xml and 404.html, copy static files
    """

    def __init__(
        self,
        site: SiteConfig,
        renderer: TemplateRenderer | None = None,
    ):
        self.site = site
        self.renderer = renderer or TemplateRenderer()

    def build(
        self,
        posts: Iterable[Post],
        output_dir: Path,
        include_drafts: bool = False,
        clean: bool = True,
        static_dir: Path | None = None,
    ) -> BuildResult:
        """Render every page into ``output_dir``.

        Raises:
            BuildError: If two pages resolve to the same output file.
        """
        output_dir = Path(output_dir)
        all_posts = list(posts)
        published = [p for p in all_posts if include_drafts or not p.draft]
        published.sort(key=Post.sort_key)

        result = BuildResult(
            output_dir=output_dir,
            post_count=len(published),
            skipped_drafts=len(all_posts) - len(published),
        )

        self._check_collisions(published, output_dir)

        if clean and output_dir.exists():
            logger.info("Cleaning %s", output_dir)
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        if static_dir is not None and Path(static_dir).is_dir():
            result.static_files = self._copy_static(Path(static_dir), output_dir)

        logger.info("Step 1: Rendering %d posts...", len(published))
        for post in published:
            self._write(result, post.permalink, self.renderer.render_post(post, self.site))

        logger.info("Step 2: Rendering home listing...")
        for pager in paginate(published, self.site.pager_size, "/"):
            self._write(result, pager.permalink, self.renderer.render_list(pager, self.site))

        logger.info("Step 3: Rendering taxonomies...")
        index = TaxonomyIndex.build(published, include_drafts=include_drafts)
        for taxonomy in TAXONOMIES:
            terms = index.terms(taxonomy)
            self._write(
                result,
                f"/{taxonomy}/",
                self.renderer.render_terms(taxonomy, terms, self.site),
            )
            for term in terms:
                for pager in paginate(term.posts, self.site.pager_size, term.permalink):
                    self._write(
                        result,
                        pager.permalink,
                        self.renderer.render_list(pager, self.site, heading=term.name),
                    )

        self._write(result, "/404.html", self.renderer.render_not_found(self.site))
        self._write(result, "/sitemap.xml", self._sitemap(result.pages, published))

        logger.info(
            "Build complete: %d pages, %d posts, %d drafts skipped",
            result.page_count, result.post_count, result.skipped_drafts,
        )
        return result

    # --- Internal Methods ---

    def _check_collisions(self, posts: list[Post], output_dir: Path) -> None:
        seen: dict[Path, Post] = {}
        for post in posts:
            target = output_path(output_dir, post.permalink)
            other = seen.get(target)
            if other is not None:
                raise BuildError(
                    f"{post.source_path} ({post.permalink}) and "
                    f"{other.source_path} ({other.permalink}) both publish to {target}"
                )
            seen[target] = post

    def _write(self, result: BuildResult, site_path: str, content: str) -> Path:
        """Write ``content`` for a site path; directory paths get index.html.

        Raises:
            BuildError: If another page of this build already wrote the file.
        """
        target = output_path(result.output_dir, site_path)
        previous = result.written.get(target)
        if previous is not None:
            raise BuildError(f"{site_path} would overwrite {previous} at {target}")
        result.written[target] = site_path
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)
        result.pages.append(site_path)
        logger.debug("Wrote %s", target)
        return target

    def _copy_static(self, static_dir: Path, output_dir: Path) -> int:
        count = 0
        for source in sorted(static_dir.rglob("*")):
            if source.is_dir():
                continue
            target = output_dir / source.relative_to(static_dir)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
            count += 1
        logger.info("Copied %d static files from %s", count, static_dir)
        return count

    def _sitemap(self, pages: list[str], posts: list[Post]) -> str:
        lastmod = {
            p.permalink: p.date.date().isoformat() for p in posts if p.date is not None
        }
        urls = [
            {"loc": self.site.absolute_url(path), "lastmod": lastmod.get(path, "")}
            for path in pages
            if path.endswith("/")
        ]
        return self.renderer.render_sitemap(urls, self.site)


def output_path(output_dir: Path, site_path: str) -> Path:
    """Map a site path onto a file below ``output_dir``.

    Raises:
        BuildError: If the path escapes ``output_dir``.
    """
    relative = site_path.lstrip("/")
    if not relative or site_path.endswith("/"):
        relative = relative + "index.html"
    target = (output_dir / relative).resolve()
    root = output_dir.resolve()
    if root != target and root not in target.parents:
        raise BuildError(f"Path {site_path!r} escapes the output directory")
    return target
