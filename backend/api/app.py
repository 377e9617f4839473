"""
Listkeeper ASGI application.

``create_app()`` wires CORS, the domain error handler and every module's
router under ``/api``; ``app`` is the instance uvicorn serves.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import ListkeeperError
from .models.errors import ErrorResponse
from .routes import health
from modules.contacts.routes import router as contacts_router
from modules.data_rights.routes import router as data_rights_router
from modules.mailing_lists.routes import router as mailing_lists_router
from modules.subscriptions.routes import router as subscriptions_router
from modules.suppression.routes import router as suppression_router
from modules.verification.routes import router as verification_router

logger = logging.getLogger(__name__)

# (router, prefix, tag)
ROUTERS = (
    (health.router, "/api", "health"),
    (subscriptions_router, "/api", "subscriptions"),
    (verification_router, "/api", "verification"),
    (suppression_router, "/api", "webhooks"),
    (mailing_lists_router, "/api/mailing-lists", "mailing-lists"),
    (contacts_router, "/api/contacts", "contacts"),
    (data_rights_router, "/api/contacts", "data-rights"),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "%s %s listening on %s:%s with %s storage",
        settings.app_name,
        settings.app_version,
        settings.host,
        settings.port,
        settings.storage_backend,
    )
    yield
    logger.info("%s stopped", settings.app_name)


async def listkeeper_error_handler(request: Request, exc: ListkeeperError) -> JSONResponse:
    """Render domain errors with their status and stable code."""
    if exc.status_code >= 500:
        logger.error("Unhandled %s on %s: %s", exc.code, request.url.path, exc.message)
    body = ErrorResponse(error=exc.code, detail=exc.message, details=exc.details or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


def create_app() -> FastAPI:
    settings = get_settings()
    interactive_docs = settings.debug

    app = FastAPI(
        title=settings.app_name,
        description="Double opt-in mailing list subscription API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if interactive_docs else None,
        redoc_url="/api/redoc" if interactive_docs else None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_exception_handler(ListkeeperError, listkeeper_error_handler)

    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])

    return app


app = create_app()
