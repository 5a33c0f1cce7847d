from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from nullmap.nullmap_api.deps.analyzer import get_analyzer
from nullmap.nullmap_api.deps.params import get_limit
from nullmap.nullmap_api.routes.null_distribution import MISSING_TABLE_MESSAGE
from nullmap.shared.analyser import TableNullAnalyzer

templates = Jinja2Templates(directory=str(Path(__file__).parent.parent / "templates"))

router = APIRouter()


@router.get(
    "/table-null-distribution-html",
    response_class=HTMLResponse,
    tags=["null distribution"],
)
async def get_table_null_distribution_html(
    request: Request,
    table: Optional[str] = None,
    limit: int = Depends(get_limit),
    analyzer: TableNullAnalyzer = Depends(get_analyzer),
):
    """Render the null distribution of a table as an HTML page"""
    if not table or not table.strip():
        return templates.TemplateResponse(
            request, "error.html", {"message": MISSING_TABLE_MESSAGE}, status_code=400
        )
    try:
        report = await run_in_threadpool(analyzer.get_null_distribution, table, limit)
    except Exception as e:
        return templates.TemplateResponse(
            request, "error.html", {"message": str(e)}, status_code=500
        )
    return templates.TemplateResponse(
        request,
        "null_distribution.html",
        {
            "table": report.table,
            "limit": report.limit,
            "summary": report.summary,
            "nullDistribution": report.null_distribution,
        },
    )
