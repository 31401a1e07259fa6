import json
import logging

from uvicorn.logging import ColourizedFormatter

from catalog.core.config import Settings, _get_bool, _get_int
from catalog.core.log import _JsonLogFormatter, _ScenarioLogFilter, build_formatter


def test_get_bool(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    assert _get_bool("FLAG") is True
    monkeypatch.setenv("FLAG", "0")
    assert _get_bool("FLAG", True) is False
    monkeypatch.delenv("FLAG")
    assert _get_bool("FLAG", True) is True


def test_get_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("WIDTH", "abc")
    assert _get_int("WIDTH", 6) == 6


def test_database_url_from_postgres_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_HOST", "db")
    monkeypatch.setenv("POSTGRES_DB", "catalog")
    monkeypatch.setenv("POSTGRES_USER", "app")
    monkeypatch.setenv("POSTGRES_PASSWORD", "secret")
    settings = Settings()
    assert settings.DATABASE_URL == "postgresql+psycopg2://app:secret@db:5432/catalog"
    assert not settings.is_sqlite


def test_database_url_falls_back_to_sqlite(monkeypatch, tmp_path):
    for name in ("DATABASE_URL", "POSTGRES_HOST", "POSTGRES_DB", "POSTGRES_USER"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "data" / "catalog.db"))
    settings = Settings()
    assert settings.is_sqlite
    assert (tmp_path / "data").is_dir()


def test_json_formatter_merges_extras():
    record = logging.LogRecord("catalog.testing.actions", logging.INFO, __file__, 1, "removal rejected", None, None)
    record.resource = "product_variant"
    _ScenarioLogFilter().filter(record)

    payload = json.loads(_JsonLogFormatter().format(record))
    assert payload["msg"] == "removal rejected"
    assert payload["level"] == "INFO"
    assert payload["scenario"] == "-"
    assert payload["resource"] == "product_variant"


def test_build_formatter():
    assert isinstance(build_formatter("JSON"), _JsonLogFormatter)
    assert isinstance(build_formatter("text"), ColourizedFormatter)
