"""Relative link integrity checks for the live and versioned docs trees."""

from .extract import extract_links
from .model import FileReport, LinkIssue, LinkRecord, VerificationReport
from .render import render_text
from .resolve import Resolution, find_target, resolve_link_path
from .verify import verify_docs, verify_file_links, verify_tree

__all__ = [
    "FileReport",
    "LinkIssue",
    "LinkRecord",
    "Resolution",
    "VerificationReport",
    "extract_links",
    "find_target",
    "render_text",
    "resolve_link_path",
    "verify_docs",
    "verify_file_links",
    "verify_tree",
]
