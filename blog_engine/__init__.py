"""
Blog engine: tooling around a corpus of Markdown posts.

- content: front matter parsing and the Post model
- linter: editorial QA (valid front matter, titles, unique slugs, drafts)
- site / taxonomy / renderer / builder: static HTML output
- webserver: serving the built site with metrics and access logs
"""

__version__ = "0.1.0"
