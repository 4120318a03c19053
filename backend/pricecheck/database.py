from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import Settings

DATABASE_URL = Settings.DATABASE_URL

# If using sqlite file, ensure check_same_thread option
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith('sqlite') else {}

# create engine with pool_pre_ping for reliability with some DB providers
engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables on ``bind`` (defaults to the configured engine)."""
    # models must be imported so they are registered on the metadata
    from . import price_models, product_models, store_models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
