# slatecms/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from slatecms.core.settings import settings

ENGINE_URL = settings.SQLALCHEMY_DATABASE_URL

_engine_kwargs: dict = {"pool_pre_ping": True}
if ENGINE_URL.startswith("sqlite"):
    # FastAPI runs sync endpoints in a threadpool
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    _engine_kwargs["pool_recycle"] = 1800

engine = create_engine(ENGINE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
