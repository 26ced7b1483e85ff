"""Subcommand parsers and runners."""
