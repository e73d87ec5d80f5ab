"""Editorial checks over the post corpus.

Checks:
- Every post has parseable, valid front matter
- Every post has a non-empty title
- Slugs and permalinks are unique across posts
- Drafts, missing dates and missing descriptions are flagged
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Iterable

from blog_engine.common.exceptions import FrontMatterError
from blog_engine.common.logging import setup_logging
from blog_engine.content.loader import iter_post_files, load_post
from blog_engine.content.models import Post

from .models import LintIssue, LintReport, Rule, Severity

logger = setup_logging(module_name="blog_engine.linter.checks")


def check_post(post: Post, fail_on_draft: bool = False) -> list[LintIssue]:
    """Run the single-post checks."""
    path = post.source_path or Path("<memory>")
    issues = []

    if not post.title.strip():
        issues.append(LintIssue(path, Rule.TITLE, Severity.ERROR, "title is empty"))

    if post.date is None:
        issues.append(LintIssue(path, Rule.DATE, Severity.WARNING, "no date set"))

    if post.draft:
        severity = Severity.ERROR if fail_on_draft else Severity.WARNING
        issues.append(LintIssue(path, Rule.DRAFT, severity, "post is marked draft"))

    if not post.description.strip():
        issues.append(
            LintIssue(path, Rule.DESCRIPTION, Severity.WARNING, "no description set")
        )

    return issues


def published_path(permalink: str) -> str:
    """The page a permalink serves; "/a/index.html" and "/a/" are the same page."""
    if permalink.endswith("/index.html"):
        return permalink[: -len("index.html")]
    return permalink


def check_unique(posts: Iterable[Post]) -> list[LintIssue]:
    """Report every post sharing a slug or a permalink with another post."""
    by_slug: dict[str, list[Post]] = defaultdict(list)
    by_permalink: dict[str, list[Post]] = defaultdict(list)
    for post in posts:
        by_slug[post.resolved_slug].append(post)
        by_permalink[published_path(post.permalink)].append(post)

    issues = []
    for rule, groups, label in (
        (Rule.DUPLICATE_SLUG, by_slug, "slug"),
        (Rule.DUPLICATE_PERMALINK, by_permalink, "permalink"),
    ):
        for value, group in sorted(groups.items()):
            if len(group) < 2:
                continue
            names = [p.source_path.name if p.source_path else p.title for p in group]
            for post in group:
                others = [n for p, n in zip(group, names) if p is not post]
                issues.append(
                    LintIssue(
                        post.source_path or Path("<memory>"),
                        rule,
                        Severity.ERROR,
                        f"{label} {value!r} also used by {', '.join(others)}",
                    )
                )
    return issues


def lint_posts(
    content_dir: Path | str,
    fail_on_draft: bool = False,
    template_names: Iterable[str] | None = None,
) -> LintReport:
    """Lint every post in ``content_dir``.

    Unlike ``load_posts`` this never stops at the first bad file; parse
    failures become ``front-matter`` errors and the rest are still checked.
    """
    report = LintReport(content_dir=Path(content_dir))
    posts = []

    for path in iter_post_files(content_dir, template_names):
        report.files_checked += 1
        try:
            post = load_post(path)
        except FrontMatterError as e:
            report.issues.append(
                LintIssue(path, Rule.FRONT_MATTER, Severity.ERROR, e.message)
            )
            continue
        posts.append(post)
        report.issues.extend(check_post(post, fail_on_draft=fail_on_draft))

    report.issues.extend(check_unique(posts))
    report.issues.sort(key=lambda i: (str(i.path), i.rule.value))

    logger.info("Lint finished: %s", report.summary())
    return report


def find_drafts(
    content_dir: Path | str,
    template_names: Iterable[str] | None = None,
) -> list[Path]:
    """Return posts marked ``draft: true``; unparseable files are skipped."""
    drafts = []
    for path in iter_post_files(content_dir, template_names):
        try:
            post = load_post(path)
        except FrontMatterError as e:
            logger.warning("Skipping unreadable post: %s", e)
            continue
        if post.draft:
            drafts.append(path)
    return drafts
