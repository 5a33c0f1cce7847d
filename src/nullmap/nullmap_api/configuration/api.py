from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

from nullmap.shared.errors import ConfigurationError


class Backend(str, Enum):
    MYSQL = "mysql"
    POSTGRES = "postgres"


DRIVER_NAMES = {
    Backend.MYSQL: "mysql+pymysql",
    Backend.POSTGRES: "postgresql+psycopg2",
}


class ApiConfiguration(BaseSettings):
    """
    Configuration for the API.
    """

    # Database connection
    db_host: str = "localhost"
    db_port: Optional[int] = None
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""

    # Backend selection, exactly one must be set
    use_mysql: bool = False
    use_postgres: bool = False

    # Sampling
    default_limit: int = 100
    max_limit: int = 10000

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def backend(self) -> Backend:
        """Resolve the two backend flags into a single Backend."""
        if self.use_mysql and self.use_postgres:
            raise ConfigurationError(
                "Both USE_MYSQL and USE_POSTGRES are set; enable exactly one database backend."
            )
        if self.use_mysql:
            return Backend.MYSQL
        if self.use_postgres:
            return Backend.POSTGRES
        raise ConfigurationError(
            "No database backend configured. Set USE_MYSQL or USE_POSTGRES to true."
        )

    def database_url(self) -> URL:
        """Build the SQLAlchemy URL for the configured backend."""
        return URL.create(
            drivername=DRIVER_NAMES[self.backend],
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name or None,
        )

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_api_configuration() -> ApiConfiguration:
    """
    Get the API configuration.
    """
    return ApiConfiguration()
