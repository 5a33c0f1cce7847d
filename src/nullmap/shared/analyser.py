import logging
from typing import Any, Dict, List, Mapping, Sequence

from nullmap.nullmap_api.configuration.api import ApiConfiguration
from nullmap.nullmap_api.models.null_distribution_response import (
    ColumnNullStat,
    NullDistributionResponse,
    NullDistributionSummary,
)
from nullmap.shared.errors import EmptyResultError, SchemaMismatchError
from nullmap.shared.row_fetcher import create_row_fetcher

logger = logging.getLogger(__name__)


def analyze_null_distribution(
    rows: Sequence[Mapping[str, Any]], table: str, limit: int
) -> NullDistributionResponse:
    """Count NULL values per column over a sample of rows.

    The column set is taken from the first row; every other row must carry
    the same columns. Only `None` counts as NULL, empty strings and zeros
    do not. Columns are ordered by NULL count, highest first, keeping the
    first row's column order on ties.

    Args:
        rows: Sampled rows, column -> value
        table: Table name, echoed in the report
        limit: Requested sample size, echoed in the report

    Returns:
        NullDistributionResponse: The report

    Raises:
        EmptyResultError: `rows` is empty
        SchemaMismatchError: a row's columns differ from the first row's
    """
    if not rows:
        raise EmptyResultError(f"No data found for table '{table}'.")

    columns = list(rows[0].keys())
    expected = set(columns)
    for index, row in enumerate(rows):
        if set(row.keys()) != expected:
            raise SchemaMismatchError(
                f"Row {index} of table '{table}' has columns {sorted(row.keys())}, "
                f"expected {sorted(expected)}."
            )

    total_rows = len(rows)
    null_counts: Dict[str, int] = {}
    for column in columns:
        null_counts[column] = sum(1 for row in rows if row[column] is None)

    columns_with_nulls = sum(1 for count in null_counts.values() if count > 0)

    # sorted() is stable, ties keep the first row's column order
    ordered = sorted(columns, key=lambda column: null_counts[column], reverse=True)
    null_distribution = {
        column: ColumnNullStat(
            total_rows=total_rows,
            null_rows=null_counts[column],
            not_null_rows=total_rows - null_counts[column],
        )
        for column in ordered
    }

    return NullDistributionResponse(
        table=table,
        limit=limit,
        summary=NullDistributionSummary(
            total_rows_scanned=total_rows,
            no_of_columns_analyzed=len(columns),
            no_of_columns_having_null_values=columns_with_nulls,
            no_of_columns_having_no_nulls=len(columns) - columns_with_nulls,
        ),
        null_distribution=null_distribution,
    )


class TableNullAnalyzer:
    config: ApiConfiguration

    def __init__(self, configuration: ApiConfiguration):
        self.config = configuration

    def get_null_distribution(self, table: str, limit: int) -> NullDistributionResponse:
        """Sample the most recent rows of a table and report its null distribution."""
        try:
            fetcher = create_row_fetcher(self.config)
            logger.info(f"Sampling {limit} rows of {table} from {fetcher.backend.value}")
            rows: List[Dict[str, Any]] = fetcher.fetch(table, limit)
            return analyze_null_distribution(rows, table, limit)
        except Exception as e:
            logger.error(f"Error getting null distribution for {table}: {str(e)}")
            raise
