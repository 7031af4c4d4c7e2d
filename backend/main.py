"""
Config Diff Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routers import config, diff, export
from services.config_manager import ConfigManager
from services.errors import DiffError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# HTTP status per DiffError code
ERROR_STATUS = {
    "INVALID_CONFIG": 400,
    "VALIDATION_ERROR": 422,
    "PARSE_ERROR": 422,
    "DIFF_CALCULATION_ERROR": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logger.info("Starting Config Diff Backend...")
    config_manager = ConfigManager.get_instance()
    logging.getLogger().setLevel(config_manager.get("logLevel", "INFO"))
    logger.info(f"ConfigManager initialized from {config_manager.config_file}")

    yield
    logger.info("Shutting down Config Diff Backend...")


app = FastAPI(
    title="Config Diff Backend",
    description="Line-oriented diffing of configuration documents",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DiffError)
async def diff_error_handler(request: Request, exc: DiffError) -> JSONResponse:
    """Report engine errors with their stable code and details"""
    status_code = ERROR_STATUS.get(exc.code, 400)
    if status_code >= 500:
        logger.error(f"{request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(export.router, prefix="/api/export", tags=["export"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "config-diff-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
