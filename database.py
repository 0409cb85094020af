from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL, DB_STATEMENT_TIMEOUT_MS, TESTING
from models import Base

if TESTING:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
elif (DATABASE_URL or "").startswith("postgresql"):
    # abandoned requests must not keep a query running on the server
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        connect_args={"options": f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}"}
    )
else:
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# create tables up front (idempotent, also under test)
Base.metadata.create_all(bind=engine)
