from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from nullmap.nullmap_api.deps.analyzer import get_analyzer
from nullmap.nullmap_api.deps.params import get_limit
from nullmap.nullmap_api.models.error_response import ErrorResponse
from nullmap.nullmap_api.models.null_distribution_response import NullDistributionResponse
from nullmap.shared.analyser import TableNullAnalyzer

MISSING_TABLE_MESSAGE = "Please provide a valid table name."

router = APIRouter()


@router.get(
    "/table-null-distribution",
    response_model=NullDistributionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["null distribution"],
)
async def get_table_null_distribution(
    table: Optional[str] = None,
    limit: int = Depends(get_limit),
    analyzer: TableNullAnalyzer = Depends(get_analyzer),
):
    """Report NULL counts per column over the most recent rows of a table"""
    if not table or not table.strip():
        return JSONResponse(status_code=400, content={"error": MISSING_TABLE_MESSAGE})
    try:
        return await run_in_threadpool(analyzer.get_null_distribution, table, limit)
    except Exception as e:
        return JSONResponse(status_code=500, content={"error": str(e)})
