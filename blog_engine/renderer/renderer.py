"""
Template Renderer for blog pages.
Handles Markdown conversion and Jinja2 template rendering.
"""

from pathlib import Path
from typing import Any, Optional

import markdown as md
from jinja2 import Environment, FileSystemLoader, select_autoescape

from blog_engine.content.models import Post, urlize
from blog_engine.site.config import SiteConfig
from blog_engine.taxonomy.index import TaxonomyTerm
from blog_engine.taxonomy.pagination import Pager

MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "toc"]


def markdown_to_html(text: str) -> str:
    """Convert a post body to HTML."""
    return md.markdown(text, extensions=MARKDOWN_EXTENSIONS)


class TemplateRenderer:
    """
    Renders site pages using Jinja2 templates.

    Usage:
        renderer = TemplateRenderer()
        html = renderer.render_post(post, site)
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize the template renderer.

        Args:
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["date_format"] = _date_format
        self.env.filters["urlize_term"] = urlize

    def render(self, template_name: str, **context: Any) -> str:
        """Render any template by name."""
        template = self.env.get_template(template_name)
        return template.render(**context)

    def render_post(self, post: Post, site: SiteConfig) -> str:
        """Render a single article page."""
        return self.render(
            "post.html",
            site=site,
            post=post,
            content=markdown_to_html(post.body),
            page_title=post.title,
        )

    def render_list(
        self,
        pager: Pager,
        site: SiteConfig,
        heading: str = "",
    ) -> str:
        """Render one page of a post listing (home page or a term page)."""
        return self.render(
            "list.html",
            site=site,
            pager=pager,
            heading=heading,
            page_title=heading or site.title,
        )

    def render_terms(
        self,
        taxonomy: str,
        terms: list[TaxonomyTerm],
        site: SiteConfig,
    ) -> str:
        """Render the overview of every term in a taxonomy."""
        return self.render(
            "terms.html",
            site=site,
            taxonomy=taxonomy,
            terms=terms,
            page_title=taxonomy.capitalize(),
        )

    def render_sitemap(self, urls: list[dict[str, Any]], site: SiteConfig) -> str:
        """Render sitemap.xml from ``{"loc": ..., "lastmod": ...}`` entries."""
        return self.render("sitemap.xml", site=site, urls=urls)

    def render_not_found(self, site: SiteConfig) -> str:
        return self.render("404.html", site=site, page_title="404 Page not found")


def _date_format(value, fmt: str = "%b %d, %Y") -> str:
    if value is None:
        return ""
    return value.strftime(fmt)
