"""Tag and category index across posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from blog_engine.content.models import Post, urlize

TAXONOMIES = ("tags", "categories")


@dataclass
class TaxonomyTerm:
    """One tag or category with the posts filed under it."""
    taxonomy: str
    name: str
    slug: str
    posts: list[Post] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.posts)

    @property
    def permalink(self) -> str:
        return f"/{self.taxonomy}/{self.slug}/"


@dataclass
class TaxonomyIndex:
    """Terms per taxonomy, keyed by URL slug."""
    taxonomies: dict[str, dict[str, TaxonomyTerm]] = field(
        default_factory=lambda: {name: {} for name in TAXONOMIES}
    )

    @classmethod
    def build(cls, posts: Iterable[Post], include_drafts: bool = False) -> TaxonomyIndex:
        """Index posts by tag and category.

        Terms differing only in case or punctuation share a slug and merge;
        the first spelling seen becomes the display name.
        """
        index = cls()
        ordered = sorted(posts, key=Post.sort_key)
        for post in ordered:
            if post.draft and not include_drafts:
                continue
            for taxonomy in TAXONOMIES:
                for name in getattr(post, taxonomy):
                    slug = urlize(name)
                    if not slug:
                        continue
                    terms = index.taxonomies[taxonomy]
                    term = terms.get(slug)
                    if term is None:
                        term = terms[slug] = TaxonomyTerm(taxonomy, name, slug)
                    if post not in term.posts:
                        term.posts.append(post)
        return index

    def terms(self, taxonomy: str, order: str = "name") -> list[TaxonomyTerm]:
        """Terms of one taxonomy, by name or by post count (largest first)."""
        if taxonomy not in self.taxonomies:
            raise KeyError(f"Unknown taxonomy: {taxonomy}")
        terms = list(self.taxonomies[taxonomy].values())
        if order == "count":
            return sorted(terms, key=lambda t: (-t.count, t.name.lower()))
        if order == "name":
            return sorted(terms, key=lambda t: t.name.lower())
        raise ValueError(f"Unknown order: {order}")

    def get(self, taxonomy: str, name: str) -> TaxonomyTerm | None:
        return self.taxonomies.get(taxonomy, {}).get(urlize(name))
