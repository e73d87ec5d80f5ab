# Linter Module
# Editorial QA over post front matter

from .checks import check_post, check_unique, find_drafts, lint_posts
from .models import LintIssue, LintReport, Rule, Severity

__all__ = [
    "LintIssue",
    "LintReport",
    "Rule",
    "Severity",
    "check_post",
    "check_unique",
    "find_drafts",
    "lint_posts",
]
