import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from payment_gateway.core.config import settings
from payment_gateway.core.exceptions import InvalidRequestError, PaymentGatewayError, validation_details
from payment_gateway.core.logging_config import configure_logging
from payment_gateway.db.core import close_db, init_db
from payment_gateway.services.http_client import create_http_client
import payment_gateway.api.routes_health as routes_health
import payment_gateway.api.routes_payment as routes_payment
import payment_gateway.api.routes_webhook as routes_webhook

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.ENV == "development":
        await init_db()
    app.state.http_client = create_http_client(settings)
    logger.info(f"{settings.APP_NAME} started ({settings.ENV})")
    yield
    await app.state.http_client.aclose()
    await close_db()
    logger.info(f"{settings.APP_NAME} stopped")


def error_response(ex: PaymentGatewayError) -> JSONResponse:
    return JSONResponse(status_code=ex.status_code, content={"error": ex.message, "details": ex.details})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Uniform payment API over EasyMoney and SuperWalletz",
        lifespan=lifespan
    )

    app.include_router(
        routes_health.router,
        prefix=settings.API_PREFIX
    )

    app.include_router(
        routes_payment.router,
        prefix=settings.API_PREFIX,
        tags=["payments"]
    )

    app.include_router(
        routes_webhook.router,
        prefix=settings.API_PREFIX,
        tags=["webhooks"]
    )

    @app.exception_handler(PaymentGatewayError)
    async def payment_gateway_error_handler(request: Request, ex: PaymentGatewayError):
        return error_response(ex)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, ex: RequestValidationError):
        return error_response(InvalidRequestError(details=validation_details(ex.errors())))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, ex: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {ex}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "An unexpected error occurred", "details": type(ex).__name__})

    @app.get("/")
    async def root():
        return {"message": "Payment gateway backend is running"}
    return app


app = create_app()
