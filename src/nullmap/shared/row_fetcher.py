import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from nullmap.nullmap_api.configuration.api import ApiConfiguration, Backend
from nullmap.shared.db_adapter import get_sql_connection, query_error, quote_table_name, validate_table_name
from nullmap.shared.errors import CompositePrimaryKeyError, NoPrimaryKeyError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class RowFetcher(ABC):
    """Fetch the most recent rows of a table, ordered by its primary key."""

    backend: Backend

    def __init__(self, configuration: ApiConfiguration):
        self.config = configuration

    def fetch(self, table: str, limit: int) -> List[Row]:
        """Fetch up to `limit` rows of `table`, newest primary key first.

        Args:
            table (str): Table name, optionally schema qualified
            limit (int): Maximum number of rows to return

        Returns:
            List[Row]: Rows as column -> value mappings, in select column order

        Raises:
            QueryError: malformed table name or a query rejected by the backend
            DatabaseConnectionError: the backend could not be reached or dropped the connection
            NoPrimaryKeyError: the table has no single-column primary key
        """
        validate_table_name(table)
        with get_sql_connection(self.config.database_url()) as conn:
            quoted_table = quote_table_name(conn, table)
            primary_key = self.get_primary_key(conn, table, quoted_table)
            quoted_key = conn.dialect.identifier_preparer.quote_identifier(primary_key)

            select_query = f"SELECT * FROM {quoted_table} ORDER BY {quoted_key} DESC LIMIT :limit"
            logger.info(f"Fetching rows: {select_query} (limit={limit})")
            try:
                result = conn.execute(text(select_query), {"limit": limit})
                rows = [dict(row) for row in result.mappings()]
            except SQLAlchemyError as e:
                logger.error(f"Error fetching rows from {table}: {str(e)}")
                raise query_error(e, table) from e

        logger.info(f"Fetched {len(rows)} rows from {table}")
        return rows

    def get_primary_key(self, conn: Connection, table: str, quoted_table: str) -> str:
        """Return the single primary key column of `table`."""
        try:
            key_columns = self.primary_key_columns(conn, table, quoted_table)
        except SQLAlchemyError as e:
            logger.error(f"Error reading primary key of {table}: {str(e)}")
            raise query_error(e, table) from e

        if not key_columns:
            raise NoPrimaryKeyError(f"No primary key found for table '{table}'.")
        if len(key_columns) > 1:
            raise CompositePrimaryKeyError(
                f"Table '{table}' has a composite primary key ({', '.join(key_columns)}); "
                "only single-column primary keys are supported."
            )
        return key_columns[0]

    @abstractmethod
    def primary_key_columns(self, conn: Connection, table: str, quoted_table: str) -> List[str]:
        """List the primary key columns of `table` in key order."""


class MySQLRowFetcher(RowFetcher):
    backend = Backend.MYSQL

    def primary_key_columns(self, conn: Connection, table: str, quoted_table: str) -> List[str]:
        keys_query = f"SHOW KEYS FROM {quoted_table} WHERE Key_name = 'PRIMARY'"
        logger.info(f"Reading primary key: {keys_query}")
        keys = conn.execute(text(keys_query)).mappings().all()
        keys = sorted(keys, key=lambda key: key["Seq_in_index"])
        return [key["Column_name"] for key in keys]


class PostgresRowFetcher(RowFetcher):
    backend = Backend.POSTGRES

    PRIMARY_KEY_QUERY = """
        SELECT a.attname AS column_name
        FROM pg_index i
        JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
        WHERE i.indrelid = CAST(:table_name AS regclass)
          AND i.indisprimary
        ORDER BY a.attnum
    """

    def primary_key_columns(self, conn: Connection, table: str, quoted_table: str) -> List[str]:
        logger.info(f"Reading primary key of {quoted_table} from pg_index")
        keys = conn.execute(text(self.PRIMARY_KEY_QUERY), {"table_name": quoted_table}).mappings().all()
        return [key["column_name"] for key in keys]


FETCHERS = {
    Backend.MYSQL: MySQLRowFetcher,
    Backend.POSTGRES: PostgresRowFetcher,
}


def create_row_fetcher(configuration: ApiConfiguration) -> RowFetcher:
    """Build the fetcher for the configured backend.

    Raises:
        ConfigurationError: no backend, or both backends, selected
    """
    return FETCHERS[configuration.backend](configuration)
