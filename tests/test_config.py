import pytest

from config.stage import StageSettings


def test_stage_builds_database_url_from_components():
    stage = StageSettings(DB_HOST="db", DB_USER="lend", DB_PASSWORD="p@ss", DB_NAME="equipment")
    assert stage.DATABASE_URL == "postgresql+asyncpg://lend:p%40ss@db:5432/equipment"
    assert stage.LOG_LEVEL == "DEBUG"
    assert stage.READ_FAILURE_POLICY == "raise"


def test_stage_without_host_cannot_build_url():
    stage = StageSettings(DB_HOST=None, DB_USER="lend", DB_NAME="equipment")
    with pytest.raises(ValueError):
        stage.DATABASE_URL
