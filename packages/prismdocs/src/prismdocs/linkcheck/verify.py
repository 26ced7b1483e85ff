from __future__ import annotations

import posixpath
from collections.abc import Set
from pathlib import Path

from ..core.context import RunContext
from ..core.logging import log_event
from .extract import extract_links
from .model import FileReport, LinkIssue, LinkRecord, Severity, VerificationReport
from .resolve import find_target, resolve_link_path, with_extension, with_index

ABSOLUTE_PATH_ISSUE = "Absolute path detected - will break in versioned docs"


def _issue(link: LinkRecord, severity: Severity, issue: str, fix: str, suggestion: str | None = None) -> LinkIssue:
    return LinkIssue(
        severity=severity,
        line=link.line,
        url=link.url,
        text=link.text,
        issue=issue,
        fix=fix,
        suggestion=suggestion,
    )


def check_link(link: LinkRecord, files: Set[str], extension: str = ".md") -> LinkIssue | None:
    target = resolve_link_path(link.source, link.url)
    if target.absolute or target.path is None:
        return _issue(link, "error", ABSOLUTE_PATH_ISSUE, "Convert to relative path")

    resolution = find_target(target.path, files, extension)
    if resolution.kind == "missing":
        shown = target.path if posixpath.splitext(target.path)[1] else target.path + extension
        return _issue(link, "error", f"File not found: {shown}", "Update link to point to correct file")
    if resolution.kind == "add_extension":
        suggestion = with_extension(target.clean, extension) + target.suffix
        return _issue(link, "warning", f"Missing {extension} extension", f"Change to: {suggestion}", suggestion)
    if resolution.kind == "add_index":
        suggestion = with_index(target.clean, extension) + target.suffix
        return _issue(
            link, "warning", f"Directory link should point to index{extension}", f"Change to: {suggestion}", suggestion
        )
    if not target.clean.endswith(extension):
        suggestion = with_extension(target.clean, extension) + target.suffix
        return _issue(
            link, "warning", f"Link should include {extension} extension", f"Add {extension} extension: {suggestion}", suggestion
        )
    return None


def verify_file_links(root: Path, source: str, files: Set[str], extension: str = ".md", label: str | None = None) -> FileReport:
    report = FileReport(file=label or source)
    path = root / source
    if not path.is_file():
        return report
    content = path.read_text(encoding="utf-8", errors="ignore")
    for link in extract_links(content, source):
        issue = check_link(link, files, extension)
        if issue is not None:
            report.add(issue)
    return report


def collect_documents(root: Path, extension: str = ".md") -> set[str]:
    return {path.relative_to(root).as_posix() for path in root.rglob(f"*{extension}") if path.is_file()}


def verify_tree(ctx: RunContext, root: Path, label: str, report: VerificationReport | None = None) -> VerificationReport:
    """Check every document under `root` against that tree's own file set."""
    result = report if report is not None else VerificationReport()
    if not root.is_dir():
        log_event(ctx, "warn", "links", "tree-missing", root=root)
        result.skipped_roots.append(label)
        return result
    extension = ctx.config.link_extension
    files = collect_documents(root, extension)
    log_event(ctx, "info", "links", "scan", tree=label, documents=len(files))
    for source in sorted(files):
        file_report = verify_file_links(root, source, files, extension, label=f"{label}/{source}")
        result.files_scanned += 1
        if file_report.has_issues:
            result.files.append(file_report)
    return result


def verify_docs(ctx: RunContext) -> VerificationReport:
    report = VerificationReport()
    verify_tree(ctx, ctx.docs_root, ctx.config.docs_dir.rstrip("/"), report)
    verify_tree(ctx, ctx.versioned_docs_root, ctx.config.versioned_docs_dir.rstrip("/"), report)
    log_event(
        ctx,
        "info",
        "links",
        "summary",
        files=report.files_scanned,
        files_with_issues=report.files_with_issues,
        errors=report.total_errors,
        warnings=report.total_warnings,
    )
    return report
