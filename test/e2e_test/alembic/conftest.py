"""Fixtures for Alembic migration tests.

Migrations run against a throwaway SQLite file; ``alembic/env.py`` reads the
URL from the shared settings object, which is pointed at that file here.
"""

from pathlib import Path

import pytest
from alembic.config import Config

from fleetdesk.server.core.config import settings

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


@pytest.fixture
def database_file(tmp_path: Path) -> Path:
    return tmp_path / "fleetdesk-migrations.db"


@pytest.fixture
def alembic_config(database_file: Path, monkeypatch) -> Config:
    monkeypatch.setattr(settings.database, "url", f"sqlite+aiosqlite:///{database_file}")
    # Without an ini file env.py leaves logging alone
    config = Config()
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return config
