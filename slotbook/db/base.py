# slotbook/db/base.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from slotbook.core.config import get_settings

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database.url.startswith("sqlite") else {}

engine = create_engine(settings.database.url, echo=settings.database.echo, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
