"""Maintenance tooling for the Prism Library documentation site."""

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "cli",
    "commands",
    "contracts",
    "core",
    "downloads",
    "linkcheck",
    "xref",
]
