"""Post model built from front matter and a Markdown body."""

from __future__ import annotations

import html
import math
import re
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Optional

import markdown as md
from pydantic import BaseModel, Field, field_validator

from blog_engine.common.config import settings

SUMMARY_DIVIDER = "<!--more-->"
WORDS_PER_MINUTE = 200

POST_SECTION = "post"

# Front matter keys mapped onto Post fields; anything else lands in ``extra``.
KNOWN_KEYS = {
    "title",
    "date",
    "draft",
    "tags",
    "categories",
    "author",
    "description",
    "url",
    "slug",
    "more_link",
}

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")
_TAXONOMY_SPLIT_RE = re.compile(r"[^\w]+", re.UNICODE)


def urlize(term: str) -> str:
    """Turn a tag or category name into a URL segment, Hugo style."""
    slug = _TAXONOMY_SPLIT_RE.sub("-", term.strip().lower())
    return slug.strip("-_")


def markdown_to_text(body: str) -> str:
    """Render Markdown and strip the markup, leaving collapsed plain text."""
    rendered = md.markdown(body, extensions=["tables", "fenced_code"])
    text = html.unescape(_TAG_RE.sub("", rendered))
    return _WS_RE.sub(" ", text).strip()


class Post(BaseModel):
    """A single Markdown article with its front matter."""

    title: str = ""
    date: Optional[datetime] = None
    draft: bool = False
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    author: str = ""
    description: str = ""
    url: Optional[str] = None
    slug: Optional[str] = None
    more_link: Optional[str] = None

    # Not front matter
    source_path: Optional[Path] = None
    body: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "author", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("url", "slug", "more_link", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("tags", "categories", mode="before")
    @classmethod
    def _coerce_terms(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError("must be a string or a list of strings")
        terms = []
        for item in value:
            if isinstance(item, (dict, list)):
                raise ValueError(f"unexpected nested value {item!r}")
            text = str(item).strip()
            if text:
                terms.append(text)
        return terms

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Optional[datetime]:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime.combine(value, time())
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip())
            except ValueError as e:
                raise ValueError(f"unrecognised date {value!r}") from e
        else:
            raise ValueError(f"unrecognised date {value!r}")
        # Naive timestamps are taken as UTC so every post date is comparable
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @classmethod
    def from_front_matter(
        cls,
        data: dict,
        body: str = "",
        source_path: Path | None = None,
    ) -> Post:
        """Build a Post from parsed front matter, keeping unknown keys."""
        known = {k: v for k, v in data.items() if k in KNOWN_KEYS}
        extra = {k: v for k, v in data.items() if k not in KNOWN_KEYS}
        return cls(**known, body=body, source_path=source_path, extra=extra)

    # --- Derived values ---

    @property
    def resolved_slug(self) -> str:
        """``slug``, else the last segment of ``url``, else the file stem."""
        if self.slug:
            return self.slug
        if self.url:
            segments = [s for s in self.url.split("/") if s and s != "index.html"]
            if segments:
                return segments[-1]
        if self.source_path is not None:
            return self.source_path.stem
        return urlize(self.title)

    @property
    def permalink(self) -> str:
        """Site path the post is published at."""
        if self.url:
            path = "/" + self.url.strip().lstrip("/")
            last = path.rsplit("/", 1)[-1]
            if last and "." not in last:
                path += "/"
            return path
        return f"/{POST_SECTION}/{self.resolved_slug}/"

    @property
    def plain_text(self) -> str:
        return markdown_to_text(self.body)

    @property
    def word_count(self) -> int:
        return len(self.plain_text.split())

    @property
    def reading_time(self) -> int:
        """Minutes to read, never less than one."""
        return max(1, math.ceil(self.word_count / WORDS_PER_MINUTE))

    @property
    def has_manual_summary(self) -> bool:
        return SUMMARY_DIVIDER in self.body

    @property
    def summary(self) -> str:
        return self.make_summary()

    def make_summary(self, words: int | None = None) -> str:
        """Text before ``<!--more-->``, else the first ``words`` words.

        ``words`` defaults to the ``content.summary_words`` setting.
        """
        if words is None:
            words = settings.content.summary_words
        if self.has_manual_summary:
            return markdown_to_text(self.body.split(SUMMARY_DIVIDER, 1)[0])
        tokens = self.plain_text.split()
        text = " ".join(tokens[:words])
        if len(tokens) > words:
            text += " …"
        return text

    def sort_key(self) -> tuple:
        """Newest first, undated posts last, ties broken by title."""
        timestamp = self.date.timestamp() if self.date else float("-inf")
        return (-timestamp, self.title.lower())
