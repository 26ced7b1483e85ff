from __future__ import annotations

from prismdocs.xref.frontmatter import extract_front_matter, extract_uid


def test_front_matter_parsed_as_yaml() -> None:
    text = "---\nuid: navigation.basics\ntitle: Navigation Basics\ntags: [a, b]\n---\n# Body\n"
    assert extract_front_matter(text) == {"uid": "navigation.basics", "title": "Navigation Basics", "tags": ["a", "b"]}
    assert extract_uid(text) == "navigation.basics"


def test_missing_header_contributes_nothing() -> None:
    assert extract_front_matter("# Title\nuid: not.a.header\n") is None
    assert extract_uid("# Title\nuid: not.a.header\n") is None


def test_header_without_uid() -> None:
    assert extract_uid("---\ntitle: Only a title\n---\n") is None
    assert extract_uid("---\nuid:\n---\n") is None


def test_header_must_open_the_file() -> None:
    assert extract_uid("\n---\nuid: late\n---\n") is None


def test_crlf_and_bom_headers() -> None:
    assert extract_uid("\ufeff---\r\nuid: windows.doc\r\n---\r\nbody") == "windows.doc"


def test_invalid_yaml_falls_back_to_line_scan() -> None:
    text = "---\nuid: dialogs.service\ntitle: [unclosed\n---\n"
    assert extract_uid(text) == "dialogs.service"


def test_non_string_uid_keeps_author_spelling() -> None:
    assert extract_uid("---\nuid: 1.10\n---\n") == "1.10"
    assert extract_uid("---\nuid: 42\n---\n") == "42"


def test_uid_value_is_trimmed() -> None:
    assert extract_uid("---\nuid: '  spaced.uid  '\n---\n") == "spaced.uid"
