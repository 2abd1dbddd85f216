import os
from collections.abc import Iterator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from recloser_api.catalog.errors import StoreUnavailable


def _build_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_user = os.environ["POSTGRES_USER"]
    db_password = os.environ["POSTGRES_PASSWORD"]
    db_name = os.environ["POSTGRES_DB"]
    db_host = os.environ["POSTGRES_HOST"]
    db_port = os.environ["POSTGRES_PORT"]

    return f"postgresql+psycopg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    # In-memory databases live only as long as their single connection
    if url in {"sqlite://", "sqlite:///:memory:"}:
        kwargs["poolclass"] = StaticPool
    return kwargs


DATABASE_URL = _build_database_url()
engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("DB_ECHO", "false").lower() in {"1", "true", "yes"},
    **_engine_kwargs(DATABASE_URL),
)


if engine.dialect.name == "sqlite":

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _snapshot_reads_enabled() -> bool:
    enabled = os.getenv("CATALOG_SNAPSHOT_READS", "false").lower() in {"1", "true", "yes", "on"}
    return enabled and engine.dialect.name == "postgresql"


def _begin_snapshot(session: Session) -> None:
    try:
        session.connection(execution_options={"isolation_level": "REPEATABLE READ"})
    except SQLAlchemyError as exc:
        raise StoreUnavailable(str(exc)) from exc


def create_db_and_tables() -> None:
    """Create every catalog table. Deployments use Alembic instead."""
    import catalog_models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session


def get_read_session() -> Iterator[Session]:
    """Session for tree, diff and layout reads.

    With CATALOG_SNAPSHOT_READS on Postgres the whole tree traversal runs
    inside one REPEATABLE READ transaction, so it observes a single snapshot.
    """
    with Session(engine) as session:
        if _snapshot_reads_enabled():
            _begin_snapshot(session)
        yield session
