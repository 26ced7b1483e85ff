"""Packaged JSON contracts for prismdocs configuration, artifacts and reports."""

from .validate import CONFIG_SCHEMA, LINKS_REPORT_SCHEMA, UID_MAPPING_SCHEMA, validate_payload

__all__ = ["CONFIG_SCHEMA", "LINKS_REPORT_SCHEMA", "UID_MAPPING_SCHEMA", "validate_payload"]
