import logging
import re
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from nullmap.shared.errors import DatabaseConnectionError, NullDistributionError, QueryError

logger = logging.getLogger(__name__)

# name or schema.name, no quoting characters allowed
TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)?$")


@contextmanager
def get_sql_connection(url: URL) -> Iterator[Connection]:
    """
    Open a single, unpooled connection for the duration of the block.

    The engine uses NullPool so the connection is really closed when the block
    exits, and the engine is disposed on every exit path.

    Args:
        url (URL): SQLAlchemy URL of the database

    Yields:
        Connection: An open SQLAlchemy connection
    """
    engine = create_engine(url, poolclass=NullPool)
    try:
        try:
            conn = engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Error connecting to {url.get_backend_name()} at {url.host}: {_error_message(e)}")
            raise DatabaseConnectionError(
                f"Could not connect to the database: {_error_message(e)}"
            ) from e
        with conn:
            yield conn
    finally:
        engine.dispose()


def quote_table_name(conn: Connection, table: str) -> str:
    """
    Validate a table identifier and quote it for the connection's dialect.

    Args:
        conn (Connection): Connection whose dialect decides the quoting style
        table (str): Table name, optionally schema qualified

    Returns:
        str: The quoted identifier, e.g. `orders` or "public"."orders"
    """
    validate_table_name(table)
    preparer = conn.dialect.identifier_preparer
    return ".".join(preparer.quote_identifier(part) for part in table.split("."))


def validate_table_name(table: str) -> None:
    if not table or not TABLE_NAME_PATTERN.match(table):
        raise QueryError(f"Invalid table name '{table}'.")


def query_error(e: SQLAlchemyError, table: str) -> NullDistributionError:
    """Wrap a backend failure raised while querying a table.

    A connection dropped mid-query is a DatabaseConnectionError, anything else a QueryError.
    """
    if isinstance(e, OperationalError) or (isinstance(e, DBAPIError) and e.connection_invalidated):
        return DatabaseConnectionError(
            f"Lost connection to the database while querying table '{table}': {_error_message(e)}"
        )
    return QueryError(f"Query on table '{table}' failed: {_error_message(e)}")


def _error_message(e: Exception) -> str:
    if getattr(e, "orig", None) is not None:
        return str(e.orig)
    return str(e)
