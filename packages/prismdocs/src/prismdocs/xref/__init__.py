"""Cross-reference (`xref:<uid>`) indexing and resolution."""

from .mapping import build_uid_mapping, run_build, write_uid_mapping
from .resolver import XREF_SCHEME, LinkNode, XrefResolver, load_uid_mapping
from .routes import route_path, strip_index_suffix
from .strip_index import strip_index_href, strip_index_html, strip_index_markdown, strip_index_nodes

__all__ = [
    "XREF_SCHEME",
    "LinkNode",
    "XrefResolver",
    "build_uid_mapping",
    "load_uid_mapping",
    "route_path",
    "run_build",
    "strip_index_href",
    "strip_index_html",
    "strip_index_markdown",
    "strip_index_nodes",
    "strip_index_suffix",
    "write_uid_mapping",
]
