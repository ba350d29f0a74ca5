from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(dsn: str) -> Engine:
    if dsn.startswith("sqlite"):
        # SQLite en memoria necesita una única conexión compartida entre sesiones.
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in dsn or dsn in {"sqlite://", "sqlite+pysqlite://"}:
            kwargs["poolclass"] = StaticPool
        return create_engine(dsn, **kwargs)

    # pool_pre_ping evita conexiones caducadas contra BDD gestionadas
    return create_engine(dsn, pool_pre_ping=True)


@lru_cache(maxsize=None)
def get_engine(dsn: str) -> Engine:
    """Engine por proceso, uno por DSN."""
    engine = build_engine(dsn)
    init_db(engine)
    return engine


def init_db(engine: Engine) -> None:
    # Registra las tablas en Base.metadata antes de crearlas.
    from infrastructure.sqlalchemy.model import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
