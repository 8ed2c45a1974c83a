import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from pydantic import PostgresDsn
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlmodel import Session, SQLModel, create_engine, select

from core.config import Settings
from core.errors import NotFound, StoreUnavailable
from models import ChainInfo

logger = logging.getLogger(__name__)


def build_database_uri(settings: Settings, db_name: str) -> str:
    if settings.SQLALCHEMY_DATABASE_URI:
        return settings.SQLALCHEMY_DATABASE_URI

    username = password = None
    if settings.DB_HAS_CREDENTIAL and settings.DB_USERNAME and settings.DB_PASSWORD:
        username = settings.DB_USERNAME
        password = settings.DB_PASSWORD

    return str(
        PostgresDsn.build(
            scheme="postgresql+psycopg",
            username=username,
            password=password,
            host=settings.DB_HOST,
            port=settings.DB_PORT,
            path=db_name,
        )
    )


def build_connect_args(settings: Settings, uri: str) -> Dict[str, str]:
    # libpq options only make sense against postgres
    if not uri.startswith("postgresql"):
        return {}

    connect_args = {
        "application_name": settings.PROJECT_NAME,
        "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
    }
    if settings.DB_HAS_TLS:
        connect_args["sslmode"] = (
            "require" if settings.DB_ALLOW_INVALID_CERTIFICATES else "verify-full"
        )
        if settings.DB_CA_FILE:
            connect_args["sslrootcert"] = settings.DB_CA_FILE
        if settings.DB_CERT_FILE:
            connect_args["sslcert"] = settings.DB_CERT_FILE
        if settings.DB_CERT_KEY_FILE:
            connect_args["sslkey"] = settings.DB_CERT_KEY_FILE
    return connect_args


class RecordStore:
    """Connection to the record sets of one chain.

    Every query goes through `session()`, which raises `StoreUnavailable` when
    the store was never connected or the driver reports a connection failure.
    """

    def __init__(
        self,
        settings: Settings,
        db_name: str,
        engine: Optional[Engine] = None,
    ):
        self.settings = settings
        self.db_name = db_name
        self.engine = engine

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> None:
        if self.engine is not None:
            return

        uri = build_database_uri(self.settings, self.db_name)
        engine = create_engine(
            uri,
            pool_pre_ping=True,
            connect_args=build_connect_args(self.settings, uri),
        )
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (OperationalError, DBAPIError) as e:
            engine.dispose()
            raise StoreUnavailable(
                f"Failed to connect to database {self.db_name}: {e}"
            ) from e

        self.engine = engine
        logger.info("Connected to database %s", self.db_name)

    def create_tables(self) -> None:
        if self.engine is None:
            raise StoreUnavailable(f"Database {self.db_name} is not connected")
        SQLModel.metadata.create_all(self.engine)

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self.engine is None:
            raise StoreUnavailable(f"Database {self.db_name} is not connected")

        session = Session(self.engine)
        try:
            yield session
        except (OperationalError, DBAPIError) as e:
            session.rollback()
            logger.error("Query against %s failed: %s", self.db_name, e)
            raise StoreUnavailable(f"Database {self.db_name} failed: {e}") from e
        finally:
            session.close()

    def get_chain_info(self) -> ChainInfo:
        with self.session() as session:
            chain_info = session.exec(select(ChainInfo).order_by(ChainInfo.id)).first()
        if chain_info is None:
            raise NotFound(f"No chain info in database {self.db_name}")
        return chain_info


def create_chain_stores(settings: Settings) -> Dict[str, RecordStore]:
    return {
        chain: RecordStore(settings, db_name)
        for chain, db_name in settings.chain_db_names.items()
    }
