import pytest
from fastapi.testclient import TestClient

from chooser.db import Database
from chooser.main import create_app
from chooser.v1 import init_db, instances, options
from chooser.v1.models import OptionIn


@pytest.fixture
def database():
    db = Database("sqlite://")
    init_db(db)
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as s:
        yield s


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def lunch(session):
    """
    Published "Lunch" poll with Pizza and Tacos.
    """
    instance = instances.create(session, "simple_poll", "Lunch")
    options.replace_all(
        session,
        instance.id,
        instance.admin_id,
        [OptionIn(value="Pizza", order=0), OptionIn(value="Tacos", order=1)],
    )
    instances.publish(session, instance.id, instance.admin_id)
    opts = {o.value: o.id for o in instances.list_options(session, instance.id)}
    return instance, opts
