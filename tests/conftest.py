import sys
import os
import tempfile
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ["TESTING"] = "1"
os.environ["ENV"] = "test"
os.environ.setdefault("LOG_FORMAT", "text")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(tempfile.gettempdir(), f"catalog-tests-{os.getpid()}.db")

import pytest
from catalog.core.database import drop_db, get_db, init_db
from catalog.core.log import setup_logging
from catalog.models import catalog_models  # noqa: F401
from catalog.testing.context import ScenarioContext

setup_logging()


@pytest.fixture(autouse=True)
def setup_db():
	init_db()
	yield
	drop_db()


@pytest.fixture
def db_session(setup_db):
	yield from get_db()


@pytest.fixture
def scenario_context(request, db_session):
	return ScenarioContext(session=db_session, scenario=request.node.name)


@pytest.fixture
def catalog_service(scenario_context):
	return scenario_context.catalog
