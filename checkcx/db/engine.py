from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from checkcx import config
from checkcx.db.models import Base


def make_engine(database_url: Optional[str] = None) -> Engine:
    """Create an SQLAlchemy Engine for `database_url` (default from env).

    SQLite engines are opened with `check_same_thread=False` because FastAPI
    runs sync endpoints on a worker thread pool.
    """
    database_url = database_url or config.database_url()
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(engine)
