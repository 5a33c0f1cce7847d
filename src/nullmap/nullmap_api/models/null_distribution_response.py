from typing import Dict
from pydantic import BaseModel, Field

class ColumnNullStat(BaseModel):
    total_rows: int = Field(..., description="Number of rows sampled")
    null_rows: int = Field(..., description="Rows where the column is NULL")
    not_null_rows: int = Field(..., description="Rows where the column is not NULL")

class NullDistributionSummary(BaseModel):
    total_rows_scanned: int = Field(..., description="Number of rows in the sample")
    no_of_columns_analyzed: int = Field(..., description="Number of columns in the sample")
    no_of_columns_having_null_values: int = Field(..., description="Columns with at least one NULL")
    no_of_columns_having_no_nulls: int = Field(..., description="Columns without any NULL")

class NullDistributionResponse(BaseModel):
    table: str = Field(..., description="Table name")
    limit: int = Field(..., description="Maximum number of rows sampled")
    summary: NullDistributionSummary = Field(..., description="Summary of the null distribution")
    null_distribution: Dict[str, ColumnNullStat] = Field(
        ..., description="Per column null counts, most NULLs first"
    )
