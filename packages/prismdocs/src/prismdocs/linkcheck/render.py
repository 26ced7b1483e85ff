from __future__ import annotations

from .model import VerificationReport


def render_text(report: VerificationReport) -> str:
    lines: list[str] = [f"Checked {report.files_scanned} markdown files", "", "=== VERIFICATION RESULTS ===", ""]
    for label in report.skipped_roots:
        lines.append(f"Skipped missing tree: {label}")
    if not report.files:
        lines.append("All links are valid!")
        return "\n".join(lines)

    lines.append(f"Found issues in {report.files_with_issues} files:")
    for file_report in report.files:
        lines.extend(["", f"{file_report.file}"])
        for title, issues in (("ERRORS", file_report.errors), ("WARNINGS", file_report.warnings)):
            if not issues:
                continue
            lines.append(f"  {title}:")
            for issue in issues:
                lines.append(f"    Line {issue.line}: {issue.url}")
                lines.append(f"      Issue: {issue.issue}")
                lines.append(f"      Fix: {issue.fix}")

    lines.extend(
        [
            "",
            "=== SUMMARY ===",
            f"Files with issues: {report.files_with_issues}",
            f"Total errors: {report.total_errors}",
            f"Total warnings: {report.total_warnings}",
        ]
    )
    return "\n".join(lines)
