import pytest
from sqlalchemy.orm import sessionmaker

from checkcx.db.engine import init_db, make_engine


@pytest.fixture
def session_factory(tmp_path):
    # file-backed so FastAPI worker threads and the test share one database
    engine = make_engine(f"sqlite:///{tmp_path / 'checkcx.db'}")
    init_db(engine)
    yield sessionmaker(bind=engine, future=True)
    engine.dispose()
