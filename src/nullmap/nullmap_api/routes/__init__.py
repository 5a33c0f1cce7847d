from fastapi import APIRouter

from nullmap.nullmap_api.routes.root import router as root_router
from nullmap.nullmap_api.routes.null_distribution import router as null_distribution_router
from nullmap.nullmap_api.routes.null_distribution_html import router as null_distribution_html_router

router = APIRouter()

router.include_router(
    root_router,
    tags=["root"],
)

router.include_router(
    null_distribution_router,
    tags=["null distribution"],
)

router.include_router(
    null_distribution_html_router,
    tags=["null distribution"],
)
