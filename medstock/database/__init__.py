from medstock.database.base import Base
from medstock.database.engine import engine
from medstock.database.session import SessionLocal, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db"]
