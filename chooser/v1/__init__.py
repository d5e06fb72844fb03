from ..db import Database
from . import templates
from .catalog import TEMPLATES
from .schema import Base

VERSION = "v1"


def init_db(database: Database) -> None:
    """
    Create the v1 tables and seed the built-in template catalog.
    Safe to run on every startup.
    """
    database.create_all(Base.metadata)
    with database.session() as session:
        templates.seed(session, TEMPLATES)
