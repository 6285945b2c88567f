from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Makes the pastepouch package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pastepouch.core import config as core_config  # noqa: E402
from pastepouch.db import create_all  # noqa: E402
from pastepouch.db import models  # noqa: E402
from pastepouch.db import session as db_session  # noqa: E402
from pastepouch.repositories.paste_repository import PasteRepository  # noqa: E402
from pastepouch.services.operations import PasteService  # noqa: E402


@pytest.fixture()
def engine(tmp_path, monkeypatch):
    """Points DATABASE_URL at a temporary SQLite file and resets settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()

    engine = db_session.get_engine()
    create_all(engine)

    yield engine

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def repo(engine) -> PasteRepository:
    return PasteRepository(engine)


@pytest.fixture()
def service(repo) -> PasteService:
    return PasteService(repo)
