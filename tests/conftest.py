import pytest

from pep_db import Model, PepDBConfig


DRIVER_TAGS = ["sqlalchemy", "sqlite3"]

WIDGETS_SCHEMA = (
    "CREATE TABLE widgets ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name TEXT, "
    "qty INTEGER)"
)


class Widgets(Model):
    description = "Parts in stock"


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "pep.db")


@pytest.fixture(params=DRIVER_TAGS)
def driver_tag(request):
    if request.param == "sqlalchemy":
        pytest.importorskip("sqlalchemy")
    return request.param


@pytest.fixture
def config(db_path, driver_tag):
    return PepDBConfig(db_path=db_path, drivers=(driver_tag,))


@pytest.fixture
def widgets(config):
    model = Widgets(config)
    model.exec(WIDGETS_SCHEMA)
    yield model
    model.close()


@pytest.fixture
def no_drivers(monkeypatch):
    """Pretend neither client API could be imported."""
    from pep_db.db import sqlalchemy_backend, sqlite_backend
    monkeypatch.setattr(sqlalchemy_backend, "sqlalchemy", None)
    monkeypatch.setattr(sqlite_backend, "sqlite3", None)
