import os
from dataclasses import dataclass

from sqlalchemy.engine import make_url

from core.domain.errors import ConfigurationError


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True, frozen=True)
class Settings:
    database_url: str
    service_role_key: str
    orm: str = "sqlalchemy"
    realtime_backend: str = ""
    tasks_channel: str = "tasks"
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    def require_backend(self) -> None:
        """
        Comprueba que el endpoint del almacén y la credencial de servicio existen.

        Raises:
            ConfigurationError: con la lista de variables que faltan.
        """
        missing = []
        if not self.database_url:
            missing.append("DATABASE_URL")
        if not self.service_role_key:
            missing.append("SERVICE_ROLE_KEY")
        if missing:
            raise ConfigurationError(missing)

    @property
    def is_postgres(self) -> bool:
        return self.database_url.startswith("postgres")

    @property
    def effective_realtime_backend(self) -> str:
        if self.realtime_backend:
            return self.realtime_backend
        return "postgres" if self.is_postgres else "memory"

    def database_dsn(self) -> str:
        """URL del almacén con la credencial de servicio como contraseña (SQLite la ignora)."""
        url = make_url(self.database_url)
        if url.host:
            url = url.set(password=self.service_role_key)
        return url.render_as_string(hide_password=False)

    def libpq_dsn(self) -> str:
        """DSN sin el sufijo de driver de SQLAlchemy, para psycopg2 y Peewee."""
        url = make_url(self.database_dsn())
        return url.set(drivername=url.get_backend_name()).render_as_string(hide_password=False)


def get_settings() -> Settings:
    """Lee la configuración del entorno en cada llamada."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "").strip(),
        service_role_key=os.getenv("SERVICE_ROLE_KEY", "").strip(),
        orm=os.getenv("ORM", "sqlalchemy").strip().lower(),
        realtime_backend=os.getenv("REALTIME_BACKEND", "").strip().lower(),
        tasks_channel=os.getenv("TASKS_CHANNEL", "tasks").strip() or "tasks",
        jwt_secret=os.getenv("JWT_SECRET", ""),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
    )


def get_cors_settings() -> dict:
    cors_origins = os.getenv("CORS_ORIGINS", "*")
    if cors_origins == "*":
        origins = ["*"]
    else:
        origins = [origin.strip() for origin in cors_origins.split(",")]

    return {
        "allow_origins": origins,
        "allow_credentials": _as_bool(os.getenv("CORS_ALLOW_CREDENTIALS", "true")),
        "allow_methods": os.getenv("CORS_ALLOW_METHODS", "*").split(","),
        "allow_headers": os.getenv("CORS_ALLOW_HEADERS", "*").split(","),
    }
