# src/db/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from src.config.settings import settings

url = settings.sqlalchemy_url()

engine_args = {}
if str(url).startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
else:
    engine_args.update(
        pool_pre_ping=True,     # detect dropped connections
        pool_recycle=1800,      # refresh connections every 30 minutes
        pool_size=5,
        max_overflow=10,
    )

engine = create_engine(url, **engine_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# request-scoped session dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
