from pathlib import Path
from urllib.parse import quote

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, URL
from sqlalchemy.orm import declarative_base, sessionmaker, Session

LIBRARY_SCHEMA = 'library'

Base = declarative_base()


def _read_only_uri(path: Path) -> str:
    return f"file:{quote(str(path))}?mode=ro"


def create_annotation_engine(annotation_db: Path, library_db: Path) -> Engine:
    """
    Read-only engine over the annotation database, with the library database
    attached (also read-only) as the `library` schema on every new connection.
    A missing file is an error, never silently created.
    """
    url = URL.create("sqlite", database=f"file:{quote(str(annotation_db))}",
                     query={"mode": "ro", "uri": "true"})
    engine = create_engine(url)

    @event.listens_for(engine, "connect")
    def attach_library_database(dbapi_connection, connection_record):
        dbapi_connection.execute(f"ATTACH DATABASE ? AS {LIBRARY_SCHEMA}", (_read_only_uri(library_db),))

    return engine


def get_direct_db(engine: Engine) -> Session:
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()
    return db
