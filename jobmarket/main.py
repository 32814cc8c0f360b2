"""
Job Marketplace Backend: FastAPI application entry point.

This module initializes the FastAPI application that serves the contract
approval workflow of the job marketplace. It configures logging and CORS,
connects to MongoDB, translates workflow errors into HTTP responses and
registers the API routes.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobmarket.core.config import CORS_ORIGINS
from jobmarket.core.logging_config import configure_logging
from jobmarket.db.client import close_mongo, init_mongo
from jobmarket.exceptions import ContractWorkflowError
from jobmarket.routes import contracts_routes

logger = logging.getLogger("jobmarket")

# ------------------------------------------------------------------------------
# Application initialization
# ------------------------------------------------------------------------------

app = FastAPI(
    title="Job Marketplace Contracts",
    description="API to manage job marketplace contracts and their approval workflow",
    version="0.1.0"
)

# ------------------------------------------------------------------------------
# Middleware configuration
# ------------------------------------------------------------------------------

# CORS middleware: origins come from the CORS_ORIGINS environment variable.
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------------------------
# Error handling
# ------------------------------------------------------------------------------

@app.exception_handler(ContractWorkflowError)
async def contract_workflow_error_handler(request: Request, exc: ContractWorkflowError):
    """
    Translate a workflow error into a JSON response.

    The status code is the one declared by the error class (404 for an
    unknown contract, 409 for a concurrent modification, ...).
    """
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )

# ------------------------------------------------------------------------------
# Application lifecycle events
# ------------------------------------------------------------------------------

@app.on_event("startup")
async def startup_db():
    """
    Configure logging and initialize the MongoDB client on application startup.

    This ensures that the database connection is ready before handling requests.
    """
    configure_logging()
    await init_mongo()


@app.on_event("shutdown")
async def shutdown_db():
    await close_mongo()

# ------------------------------------------------------------------------------
# API routes registration
# ------------------------------------------------------------------------------

app.include_router(contracts_routes.router, prefix="/contracts", tags=["Contracts"])
