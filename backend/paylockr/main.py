"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from paylockr.core.config import settings
from paylockr.core.database import init_tables
from paylockr.core.logging import setup_logging
from paylockr.core.middleware import CorrelationIdMiddleware, RequestLoggingMiddleware
from paylockr.modules.payment_gateway.service import get_payment_gateway
from paylockr.modules.subscription import router as subscription_router
from paylockr.modules.subscription.router import method_not_allowed_handler

# Set up logging with correlation IDs
setup_logging(
    level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL,
    json_format=settings.LOG_JSON,
    include_stack_trace=True,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_tables()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
## PayLockr Subscription API

Activates PayLockr subscriptions once Flutterwave confirms the payment.

The gateway redirects the customer to `GET /verify-subscription` with
`tx_ref`, `status` and `transaction_id`. The payment is re-verified
server-side before any account or subscription is touched.
    """,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "health",
            "description": "Health check endpoints",
        },
        {
            "name": "subscriptions",
            "description": "Gateway callback that verifies payments and activates subscriptions",
        },
    ],
)

# Last added wraps the rest, so the correlation ID is set before logging
app.add_middleware(RequestLoggingMiddleware, log_query_params=True)
app.add_middleware(CorrelationIdMiddleware)


@app.get("/health", tags=["health"])
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        dict: Health status, API version and whether the gateway secret is set.
    """
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "gateway_configured": get_payment_gateway().is_configured,
    }


app.include_router(subscription_router)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)
