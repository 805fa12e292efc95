# tests/conftest.py
import os

# Settings are read at import time; keep the application away from the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("INIT_DB_ON_STARTUP", "false")
os.environ.setdefault("LOG_TRANSLATION_OPERATIONS", "false")

from datetime import datetime  # noqa: E402
from typing import Dict, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from chariot.api.deps import get_db  # noqa: E402
from chariot.core.translations import TranslationMap  # noqa: E402
from chariot.db.models import Base, Monster, Spell  # noqa: E402
from chariot.main import app  # noqa: E402

SEED_TIMESTAMP = "2024-01-01T00:00:00+00:00"


def build_block(name: str, srd: bool = False, deleted: bool = False, **content) -> Dict:
    """A stored translation block as the services write it."""
    block = {"srd": srd, "name": name}
    block.update(content)
    block.update(
        {
            "created_at": SEED_TIMESTAMP,
            "updated_at": SEED_TIMESTAMP,
            "deleted_at": SEED_TIMESTAMP if deleted else None,
        }
    )
    return block


@pytest.fixture()
def make_block():
    return build_block


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    """TestClient bound to the per-test database. Startup hooks are not run."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _seed(session, model, translations: Dict[str, Dict], tag: int = 0, deleted: bool = False):
    entity = model(tag=tag)
    entity.apply_translation_map(TranslationMap(translations))
    if deleted:
        entity.deleted_at = datetime(2024, 1, 2)
    session.add(entity)
    session.commit()
    return entity.id


@pytest.fixture()
def seed_spell(session_factory):
    """Insert a spell directly, bypassing the services (SRD blocks allowed)."""

    def _seed_spell(translations: Dict[str, Dict], tag: int = 0, deleted: bool = False) -> str:
        session = session_factory()
        try:
            return _seed(session, Spell, translations, tag, deleted)
        finally:
            session.close()

    return _seed_spell


@pytest.fixture()
def seed_monster(session_factory):
    """Insert a monster directly, bypassing the services."""

    def _seed_monster(translations: Dict[str, Dict], tag: int = 0, deleted: bool = False) -> str:
        session = session_factory()
        try:
            return _seed(session, Monster, translations, tag, deleted)
        finally:
            session.close()

    return _seed_monster


@pytest.fixture()
def load_spell(session_factory):
    """Read a spell back through a fresh session."""

    def _load(spell_id: str) -> Optional[Spell]:
        session = session_factory()
        try:
            spell = session.get(Spell, spell_id)
            if spell is not None:
                session.expunge(spell)
            return spell
        finally:
            session.close()

    return _load
