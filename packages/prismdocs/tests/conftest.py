from __future__ import annotations

import shutil
import socket
from pathlib import Path

import pytest
from hypothesis import settings
from hypothesis.database import DirectoryBasedExampleDatabase
from prismdocs.core.context import RunContext
from prismdocs.xref.mapping import run_build

_ROOT = Path(__file__).resolve().parents[3]
FIXTURES = Path(__file__).resolve().parent / "fixtures"
_SITE_FIXTURES = {"site_root", "site_ctx", "built_site"}
_HYPOTHESIS_DB = _ROOT / "artifacts/prismdocs/.hypothesis/examples"
_HYPOTHESIS_DB.parent.mkdir(parents=True, exist_ok=True)
settings.register_profile("prismdocs", database=DirectoryBasedExampleDatabase(_HYPOTHESIS_DB))
settings.load_profile("prismdocs")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        # tests reading the fixture docs site are selectable with `-m site`
        if _SITE_FIXTURES.intersection(getattr(item, "fixturenames", ())):
            item.add_marker("site")
        if not item.get_closest_marker("integration") and not item.get_closest_marker("slow"):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests; NuGet calls must use httpx.MockTransport")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Each test runs from its own tmp dir; the resolver reads `uid-mapping.json` from the cwd."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A writable copy of the fixture docs site."""
    root = tmp_path / "site"
    shutil.copytree(FIXTURES / "site", root)
    return root


@pytest.fixture
def ctx(tmp_path: Path) -> RunContext:
    return RunContext.from_args(run_id="pytest", cwd=str(tmp_path))


@pytest.fixture
def site_ctx(site_root: Path) -> RunContext:
    return RunContext.from_args(run_id="pytest", cwd=str(site_root))


@pytest.fixture
def built_site(site_ctx: RunContext) -> RunContext:
    """The fixture site with `uid-mapping.json` already built."""
    run_build(site_ctx)
    return site_ctx
