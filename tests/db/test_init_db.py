# tests/db/test_init_db.py
from chariot.core.config import settings
from chariot.db import init_db as init_db_script
from chariot.db.session import init_db, verify_db_connection


def test_verify_db_connection():
    assert verify_db_connection() is True


def test_init_db_creates_schema():
    assert init_db() is True
    assert init_db(reset=True) is True


def test_create_database_directory(monkeypatch, tmp_path):
    db_file = tmp_path / "data" / "chariot.db"
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{db_file}")

    init_db_script.create_database_directory()

    assert db_file.parent.is_dir()


def test_create_database_directory_ignores_memory(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite://")

    init_db_script.create_database_directory()

    assert list(tmp_path.iterdir()) == []
