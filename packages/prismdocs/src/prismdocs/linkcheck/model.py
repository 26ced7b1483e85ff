from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class LinkRecord:
    source: str
    line: int
    text: str
    url: str


@dataclass(frozen=True)
class LinkIssue:
    severity: Severity
    line: int
    url: str
    text: str
    issue: str
    fix: str
    suggestion: str | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "severity": self.severity,
            "line": self.line,
            "url": self.url,
            "text": self.text,
            "issue": self.issue,
            "fix": self.fix,
            "suggestion": self.suggestion,
        }


@dataclass
class FileReport:
    file: str
    errors: list[LinkIssue] = field(default_factory=list)
    warnings: list[LinkIssue] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.errors or self.warnings)

    def add(self, issue: LinkIssue) -> None:
        (self.errors if issue.severity == "error" else self.warnings).append(issue)

    def to_payload(self) -> dict[str, object]:
        return {
            "file": self.file,
            "errors": [issue.to_payload() for issue in self.errors],
            "warnings": [issue.to_payload() for issue in self.warnings],
        }


@dataclass
class VerificationReport:
    files: list[FileReport] = field(default_factory=list)
    files_scanned: int = 0
    skipped_roots: list[str] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return sum(len(report.errors) for report in self.files)

    @property
    def total_warnings(self) -> int:
        return sum(len(report.warnings) for report in self.files)

    @property
    def files_with_issues(self) -> int:
        return len(self.files)

    def to_payload(self, run_id: str = "") -> dict[str, object]:
        return {
            "schema_name": "prismdocs.links-report.v1",
            "schema_version": 1,
            "tool": "prismdocs",
            "kind": "links-verify",
            "status": "fail" if self.total_errors else "pass",
            "run_id": run_id,
            "skipped_roots": list(self.skipped_roots),
            "summary": {
                "files_scanned": self.files_scanned,
                "files_with_issues": self.files_with_issues,
                "errors": self.total_errors,
                "warnings": self.total_warnings,
            },
            "files": [report.to_payload() for report in self.files],
        }
