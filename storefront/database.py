# storefront/database.py
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from storefront.core.config import get_settings

# Import models so SQLModel metadata is populated before create_all()
from storefront.models import kv_entry as _kv_models  # noqa: F401


# ---------------------------------------------------------
# SQLite is the default durable medium.
#
# - check_same_thread=False: the store is shared by every service in the
#   process; access is still single-threaded cooperative
# - StaticPool for in-memory URLs: every session must see the same
#   connection, otherwise each one gets a fresh empty database
# ---------------------------------------------------------


def make_engine(database_url: str | None = None, echo: bool = False) -> Engine:
    """
    Create the engine backing the key-value store.

    Args:
        database_url: SQLAlchemy URL; defaults to Settings.DATABASE_URL.
        echo: log emitted SQL (debugging only).
    """
    url = database_url or get_settings().DATABASE_URL

    kwargs: dict = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    return create_engine(url, **kwargs)


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once when the storefront is wired up.
    """
    SQLModel.metadata.create_all(engine)
