# Renderer Module
# Markdown conversion and Jinja2 page templates

from .renderer import MARKDOWN_EXTENSIONS, TemplateRenderer, markdown_to_html

__all__ = [
    "MARKDOWN_EXTENSIONS",
    "TemplateRenderer",
    "markdown_to_html",
]
