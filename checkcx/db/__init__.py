from .engine import make_engine, init_db
from .models import Base

__all__ = ["make_engine", "init_db", "Base"]
