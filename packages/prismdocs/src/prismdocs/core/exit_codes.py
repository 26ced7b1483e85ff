"""Process exit codes shared by every prismdocs command."""

from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_VALIDATION = 4
ERR_LINKS = 5
ERR_NETWORK = 6
ERR_INTERNAL = 70
