from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .clock import utc_run_stamp
from .config import SiteConfig, load_site_config
from .env import getenv, getenv_flag
from .repo_root import find_repo_root

OutputFormat = Literal["text", "json"]


def _under(root: Path, configured: str) -> Path:
    raw = Path(configured)
    return raw.resolve() if raw.is_absolute() else (root / raw).resolve()


@dataclass(frozen=True)
class RunContext:
    """Per-invocation state handed explicitly to every operation."""

    run_id: str
    repo_root: Path
    config: SiteConfig = field(default_factory=SiteConfig)
    output_format: OutputFormat = "text"
    verbose: bool = False
    quiet: bool = False
    log_json: bool = False

    @property
    def docs_root(self) -> Path:
        return _under(self.repo_root, self.config.docs_dir)

    @property
    def versioned_docs_root(self) -> Path:
        return _under(self.repo_root, self.config.versioned_docs_dir)

    @property
    def uid_mapping_path(self) -> Path:
        return _under(self.repo_root, self.config.uid_mapping_path)

    @property
    def downloads_cache_path(self) -> Path:
        return _under(self.repo_root, self.config.downloads_cache_path)

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        cwd: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        repo_root = Path(cwd).resolve() if cwd else find_repo_root()
        return cls(
            run_id=run_id or getenv("PRISMDOCS_RUN_ID") or f"prismdocs-{utc_run_stamp()}",
            repo_root=repo_root,
            config=load_site_config(repo_root),
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json or getenv_flag("PRISMDOCS_LOG_JSON"),
        )
