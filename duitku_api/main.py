from __future__ import annotations

from fastapi import FastAPI

from duitku_api.core.config import get_settings
from duitku_api.core.exceptions import register_exception_handlers
from duitku_api.core.logging import setup_logging
from duitku_api.routers import callback, health, payment_methods, transactions
from duitku_api.services.callback import CallbackHandler


def create_app(callback_handler: CallbackHandler | None = None) -> FastAPI:
    setup_logging()
    settings = get_settings()

    app = FastAPI(
        title="Duitku Merchant API",
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
    )
    app.state.callback_handler = callback_handler or callback.log_callback

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(payment_methods.router, prefix="/api/v1")
    app.include_router(transactions.router, prefix="/api/v1")
    app.include_router(callback.router, prefix="/api/v1")

    return app


app = create_app()
