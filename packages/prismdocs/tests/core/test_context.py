from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers import write
from prismdocs.core.context import RunContext
from prismdocs.core.logging import log_event
from prismdocs.core.repo_root import find_repo_root


def test_from_args_explicit_root(tmp_path: Path) -> None:
    ctx = RunContext.from_args(run_id="r1", cwd=str(tmp_path))
    assert ctx.run_id == "r1"
    assert ctx.repo_root == tmp_path.resolve()
    assert ctx.docs_root == tmp_path.resolve() / "docs"
    assert ctx.versioned_docs_root == tmp_path.resolve() / "versioned_docs"
    assert ctx.uid_mapping_path == tmp_path.resolve() / "uid-mapping.json"


def test_run_id_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRISMDOCS_RUN_ID", "from-env")
    assert RunContext.from_args(cwd=str(tmp_path)).run_id == "from-env"
    monkeypatch.delenv("PRISMDOCS_RUN_ID")
    assert RunContext.from_args(cwd=str(tmp_path)).run_id.startswith("prismdocs-")


def test_find_repo_root_walks_up_to_marker(tmp_path: Path) -> None:
    write(tmp_path, "docusaurus.config.ts", "export default {};\n")
    nested = tmp_path / "docs/a/b"
    nested.mkdir(parents=True)
    assert find_repo_root(nested) == tmp_path.resolve()


def test_find_repo_root_falls_back_to_start(tmp_path: Path) -> None:
    nested = tmp_path / "loose"
    nested.mkdir()
    found = find_repo_root(nested)
    assert found in {nested.resolve(), *nested.resolve().parents}


def test_log_event_levels(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    quiet = RunContext(run_id="q", repo_root=tmp_path, quiet=True)
    log_event(quiet, "info", "test", "hidden")
    log_event(quiet, "warn", "test", "shown", key="v")
    default = RunContext(run_id="d", repo_root=tmp_path)
    log_event(default, "debug", "test", "hidden-debug")
    verbose = RunContext(run_id="v", repo_root=tmp_path, verbose=True)
    log_event(verbose, "debug", "test", "shown-debug")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == [
        "level=warn component=test action=shown key=v",
        "level=debug component=test action=shown-debug",
    ]


def test_log_event_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ctx = RunContext(run_id="j", repo_root=tmp_path, log_json=True)
    log_event(ctx, "info", "test", "json", path=tmp_path, items=("a", "b"))
    record = json.loads(capsys.readouterr().err)
    assert record["run_id"] == "j"
    assert record["action"] == "json"
    assert record["path"] == str(tmp_path)
    assert record["items"] == ["a", "b"]
    assert record["file"].endswith("test_context.py")
