from functools import lru_cache

from peewee import Database, DatabaseProxy
from playhouse.db_url import connect

# Los modelos se enlazan al proxy; la BDD real se inicializa desde el container.
database_proxy = DatabaseProxy()


@lru_cache(maxsize=None)
def _connect(dsn: str) -> Database:
    from infrastructure.peewee.model.models import ALL_MODELS

    db = connect(dsn)
    database_proxy.initialize(db)
    db.connect(reuse_if_open=True)
    # En producción esto iría en migraciones; aquí se crean al arrancar.
    db.create_tables(ALL_MODELS, safe=True)
    return db


def get_database(dsn: str) -> Database:
    """Conexión Peewee por proceso, una por DSN. El proxy apunta siempre a la última pedida."""
    db = _connect(dsn)
    database_proxy.initialize(db)
    return db
