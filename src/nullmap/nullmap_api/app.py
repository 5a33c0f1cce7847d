import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from nullmap.nullmap_api.configuration.api import get_api_configuration
from nullmap.nullmap_api.routes import router as main_router

# Load environment variables
load_dotenv()

# OpenAPI/Swagger documentation
description = """
Table Null Distribution API reports how many rows of a recent sample contain NULL in each column
of a MySQL or PostgreSQL table.

## Features

* Per column NULL / not NULL counts over the most recent rows, ordered by primary key
* Summary of columns with and without NULL values
* JSON and HTML views of the same report
"""

tags_metadata = [
    {
        "name": "root",
        "description": "Basic API information and health check",
    },
    {
        "name": "null distribution",
        "description": "Null distribution of a table sample",
    },
]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configuration = get_api_configuration()
    logger.info("Database configuration:")
    logger.info(f"  - Host: {configuration.db_host}")
    logger.info(f"  - Database: {configuration.db_name}")
    logger.info(f"  - MySQL enabled: {configuration.use_mysql}")
    logger.info(f"  - PostgreSQL enabled: {configuration.use_postgres}")
    logger.info(f"  - Default limit: {configuration.default_limit}")
    yield


app = FastAPI(
    title="Table Null Distribution API",
    description=description,
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
)

app.include_router(
    router=main_router,
    responses={404: {"description": "Not found"}},
)
