"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must be called before importing modules that read env vars (MONGO_URI)
load_dotenv()

from api.errors import register_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.routes import health, users
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import create_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Usuarios API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared MongoDB client, ensure indexes, close it on shutdown."""
    client = create_mongodb_client()
    app.state.mongo_client = client
    if client:
        if ensure_all_indexes(client[DATABASE_NAME]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, user endpoints will return 503")

    yield

    if client:
        client.close()
        logger.info("MongoDB client closed")


app = FastAPI(
    title=SERVICE_NAME,
    description="CRUD API for user records stored in MongoDB",
    version=VERSION,
    lifespan=lifespan,
)

# Wildcard origins cannot be combined with credentials
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 3000))
    logger.info(f"Server listening on http://localhost:{port}")
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False,  # RequestLoggingMiddleware covers access logs
    )
