# Sales Agent backend entrypoint: tool surface, REST surface and health checks.

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sales_agent.app.api import rest, tools
from sales_agent.app.core.logging import configure_logging
from sales_agent.app.core.settings import get_settings
from sales_agent.app.core.time import format_timestamp, utc_now
from sales_agent.app.dependencies.store import get_store, reset_store
from sales_agent.app.storage.base import SalesStore

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_store not in app.dependency_overrides:
        store = get_store()
        logger.info(
            "%s %s ready (%s storage, %s)",
            settings.app_name,
            settings.api_version,
            store.backend_name,
            settings.environment,
        )
    try:
        yield
    finally:
        reset_store()


app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tools.router)
app.include_router(rest.router)


@app.get("/")
def read_root():
    return {"app": "Sales Agent backend", "status": "ok"}


@app.get("/health")
def health_check(store: SalesStore = Depends(get_store)):
    return {"status": "ok", "timestamp": format_timestamp(utc_now()), "database": store.backend_name}


def run():
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
