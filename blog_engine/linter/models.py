"""Data models for the content linter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    """How bad a lint finding is."""
    ERROR = "error"
    WARNING = "warning"


class Rule(str, Enum):
    """Editorial checks run against every post."""
    FRONT_MATTER = "front-matter"
    TITLE = "title"
    DUPLICATE_SLUG = "duplicate-slug"
    DUPLICATE_PERMALINK = "duplicate-permalink"
    DATE = "date"
    DRAFT = "draft"
    DESCRIPTION = "description"


@dataclass
class LintIssue:
    """A single finding against one file."""
    path: Path
    rule: Rule
    severity: Severity
    message: str

    def format(self, root: Path | None = None) -> str:
        path = self.path
        if root is not None:
            try:
                path = self.path.relative_to(root)
            except ValueError:
                pass
        return f"{path}: {self.severity.value}: [{self.rule.value}] {self.message}"


@dataclass
class LintReport:
    """All findings for a content directory."""
    content_dir: Path
    files_checked: int = 0
    issues: list[LintIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def by_rule(self, rule: Rule) -> list[LintIssue]:
        return [i for i in self.issues if i.rule == rule]

    def summary(self) -> str:
        return (
            f"{self.files_checked} files checked: "
            f"{len(self.errors)} errors, {len(self.warnings)} warnings"
        )
