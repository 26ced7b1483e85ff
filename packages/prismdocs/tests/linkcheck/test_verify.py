from __future__ import annotations

from pathlib import Path

import pytest
from helpers import write
from prismdocs.core.context import RunContext
from prismdocs.linkcheck.model import LinkRecord, VerificationReport
from prismdocs.linkcheck.render import render_text
from prismdocs.linkcheck.resolve import find_target, resolve_link_path
from prismdocs.linkcheck.verify import ABSOLUTE_PATH_ISSUE, check_link, verify_docs, verify_file_links, verify_tree


def _check(source: str, url: str, files: set[str]):
    return check_link(LinkRecord(source=source, line=1, text="t", url=url), files)


def test_resolve_link_path_joins_and_normalizes() -> None:
    target = resolve_link_path("a/b/page.md", "../c/d.md#frag")
    assert target.path == "a/c/d.md"
    assert target.clean == "../c/d.md"
    assert target.suffix == "#frag"
    assert not target.absolute


def test_resolve_link_path_absolute() -> None:
    target = resolve_link_path("a.md", "/docs/x?y=1")
    assert target.absolute
    assert target.path is None
    assert target.suffix == "?y=1"


@pytest.mark.parametrize(
    ("relative", "kind", "actual"),
    [
        ("a/b.md", "exact", "a/b.md"),
        ("a/b", "add_extension", "a/b.md"),
        ("a", "add_index", "a/index.md"),
        ("a/missing", "missing", None),
    ],
)
def test_find_target_resolution_order(relative: str, kind: str, actual: str | None) -> None:
    resolution = find_target(relative, {"a/b.md", "a/index.md"})
    assert resolution.kind == kind
    assert resolution.actual_path == actual
    assert resolution.exists == (kind != "missing")


def test_exact_link_is_clean() -> None:
    assert _check("a.md", "./b.md", {"a.md", "b.md"}) is None
    assert _check("a.md", "./b.md#part", {"a.md", "b.md"}) is None


def test_missing_extension_is_a_warning_with_suggestion() -> None:
    issue = _check("a.md", "./b", {"a.md", "b.md"})
    assert issue is not None
    assert issue.severity == "warning"
    assert issue.issue == "Missing .md extension"
    assert issue.suggestion == "./b.md"
    assert issue.fix == "Change to: ./b.md"


def test_missing_target_is_an_error() -> None:
    issue = _check("a.md", "./missing", {"a.md"})
    assert issue is not None
    assert issue.severity == "error"
    assert issue.issue == "File not found: missing.md"
    assert issue.fix == "Update link to point to correct file"


def test_missing_asset_keeps_its_own_extension() -> None:
    issue = _check("a.md", "./img/diagram.png", {"a.md"})
    assert issue is not None
    assert issue.severity == "error"
    assert issue.issue == "File not found: img/diagram.png"


def test_missing_link_in_dotted_directory_gets_extension() -> None:
    issue = _check("version-8.1/index.md", "./legacy", {"version-8.1/index.md"})
    assert issue is not None
    assert issue.issue == "File not found: version-8.1/legacy.md"


def test_directory_link_suggests_index() -> None:
    issue = _check("a.md", "./guide/", {"a.md", "guide/index.md"})
    assert issue is not None
    assert issue.severity == "warning"
    assert issue.issue == "Directory link should point to index.md"
    assert issue.suggestion == "./guide/index.md"


def test_fragment_is_kept_in_suggestion() -> None:
    issue = _check("a.md", "./b#part", {"a.md", "b.md"})
    assert issue is not None
    assert issue.suggestion == "./b.md#part"


@pytest.mark.parametrize("files", [set(), {"docs/x.md"}, {"x.md", "a.md"}])
def test_absolute_path_is_always_an_error(files: set[str]) -> None:
    issue = _check("a.md", "/docs/x", files)
    assert issue is not None
    assert issue.severity == "error"
    assert issue.issue == ABSOLUTE_PATH_ISSUE


def test_verify_file_links_on_disk(tmp_path: Path) -> None:
    write(tmp_path, "a.md", "[b](./b)\n[c](./c.md)\n")
    write(tmp_path, "b.md", "")
    report = verify_file_links(tmp_path, "a.md", {"a.md", "b.md"})
    assert [issue.issue for issue in report.warnings] == ["Missing .md extension"]
    assert [issue.issue for issue in report.errors] == ["File not found: c.md"]
    assert [issue.line for issue in report.errors] == [2]


def test_verify_fixture_site(site_ctx: RunContext) -> None:
    report = verify_docs(site_ctx)
    assert report.files_scanned == 7
    assert report.files_with_issues == 2
    assert report.total_errors == 3
    assert report.total_warnings == 2
    assert report.skipped_roots == []

    by_file = {file_report.file: file_report for file_report in report.files}
    assert set(by_file) == {"docs/commands/composite.md", "versioned_docs/version-8.1/index.md"}

    composite = by_file["docs/commands/composite.md"]
    assert [(i.line, i.issue) for i in composite.errors] == [
        (4, ABSOLUTE_PATH_ISSUE),
        (5, "File not found: commands/missing.md"),
    ]
    assert [(i.line, i.suggestion) for i in composite.warnings] == [
        (3, "../navigation/basics.md"),
        (3, "./index.md"),
    ]
    versioned = by_file["versioned_docs/version-8.1/index.md"]
    assert [i.issue for i in versioned.errors] == ["File not found: version-8.1/legacy.md"]


def test_missing_tree_is_skipped(ctx: RunContext, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write(tmp_path, "docs/a.md", "[b](./b.md)\n")
    write(tmp_path, "docs/b.md", "")
    report = verify_docs(ctx)
    assert report.files_scanned == 2
    assert report.skipped_roots == ["versioned_docs"]
    assert report.total_errors == 0
    assert "tree-missing" in capsys.readouterr().err


def test_versioned_links_resolve_within_their_own_tree(ctx: RunContext, tmp_path: Path) -> None:
    write(tmp_path, "docs/only-live.md", "")
    write(tmp_path, "versioned_docs/v1/page.md", "[live](../../docs/only-live.md)\n")
    report = verify_tree(ctx, tmp_path / "versioned_docs", "versioned_docs")
    assert report.total_errors == 1


def test_render_text_clean_report() -> None:
    text = render_text(VerificationReport(files_scanned=4))
    assert "Checked 4 markdown files" in text
    assert "All links are valid!" in text
    assert "=== SUMMARY ===" not in text


def test_render_text_with_issues(site_ctx: RunContext) -> None:
    text = render_text(verify_docs(site_ctx))
    assert "Found issues in 2 files:" in text
    assert "docs/commands/composite.md" in text
    assert "  ERRORS:" in text
    assert "  WARNINGS:" in text
    assert "Line 5: ./missing.md" in text
    assert text.endswith("Total errors: 3\nTotal warnings: 2")
