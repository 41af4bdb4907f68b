"""FastAPI application entry point for the URL shortener service.

This module configures logging, creates the application with its single key
store, registers middleware and routes, and exposes a ``run()`` entry point.

Application Lifecycle Diagram
=============================
::
    ┌─────────────┐
    │ import      │
    │ module      │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ create_app()│
    │ KeyStore on │
    │ app.state   │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ lifespan()  │
    │ startup log │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Serve HTTP  │
    │ requests    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ lifespan()  │
    │ shutdown log│
    └─────────────┘

How to Use
===========
**Step 1 — Run the console script**::
    url-shortener

**Step 2 — Or run with uvicorn**::
    uvicorn shortener.main:app --host 0.0.0.0 --port 3030

**Step 3 — Shorten a URL**::
    curl -X POST http://localhost:3030/api/shorten \
         -H "Content-Type: application/json" \
         -d '{"url": "https://example.com"}'

Key Behaviours
===============
- The key store lives in memory; all entries are lost on restart.
- Every application instance owns its own key store.
- Prometheus metrics are exposed at /metrics.
"""

__all__ = ["app", "create_app", "run"]

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from shortener.config import Settings, get_settings
from shortener.dependencies import LOGGER_NAME
from shortener.keystore import KeyStore
from shortener.routes import router


def setup_logger(settings: Settings) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level.

    Module loggers (``shortener.keystore`` etc.) propagate to it.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL.upper())
    return logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger = logging.getLogger(LOGGER_NAME)
    logger.info(f"{app.title} started with an empty key store")
    yield
    logger.info(f"{app.title} shutting down, dropping {len(app.state.keystore)} entries")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its key store.

    Instrumentator metrics live in the default Prometheus registry, so this is
    meant to run once per process (the module-level ``app`` below).
    """
    settings = settings or get_settings()
    setup_logger(settings)

    application = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="In-memory URL shortener",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.keystore = KeyStore(key_length=settings.SHORT_CODE_LENGTH)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=False,
        should_respect_env_var=False,
    ).instrument(application).expose(application)

    application.include_router(router)
    return application


app = create_app()


def run() -> None:
    settings = get_settings()
    logging.getLogger(LOGGER_NAME).info(f"URL Shortener running on: {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
