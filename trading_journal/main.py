"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trading_journal.config import settings
from trading_journal.database import create_db_and_tables
from trading_journal.utils.logging import setup_logging
from trading_journal.api import trades, analytics, system
from trading_journal.api import settings as settings_api


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    yield


app = FastAPI(
    title="Trading Journal",
    description="Trade journal with R-multiple performance analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed payloads are client errors: 400 with the validation details."""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "details": jsonable_encoder(exc.errors())},
    )


# Mount routers
app.include_router(trades.router)
app.include_router(settings_api.router)
app.include_router(analytics.router)
app.include_router(system.router)
