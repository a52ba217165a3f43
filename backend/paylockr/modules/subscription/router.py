"""API Router for the subscription verification callback.

The payment gateway redirects the customer's browser here after checkout.
Only GET performs work; OPTIONS answers CORS preflight and every other
method is rejected. All responses carry the configured CORS headers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from paylockr.core.config import settings
from paylockr.core.database import get_session
from paylockr.core.logging import log_error
from paylockr.modules.payment_gateway.interface import PaymentGatewayInterface
from paylockr.modules.payment_gateway.service import get_payment_gateway
from paylockr.modules.subscription.exceptions import SubscriptionVerificationError
from paylockr.modules.subscription.schemas import (
    SubscriptionVerificationErrorResponse,
    SubscriptionVerificationResponse,
)
from paylockr.modules.subscription.service import SubscriptionActivationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["subscriptions"])

# Registered so that unsupported methods reach the handler and get the
# callback's own 405 body instead of the framework default.
CALLBACK_METHODS = ["GET", "OPTIONS", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def get_activation_service(
    session: AsyncSession = Depends(get_session),
    gateway: PaymentGatewayInterface = Depends(get_payment_gateway),
) -> SubscriptionActivationService:
    return SubscriptionActivationService(session, gateway)


def _method_not_allowed() -> PlainTextResponse:
    return PlainTextResponse(
        "Method not allowed", status_code=405, headers=settings.cors_headers
    )


def _failure_response(details: str) -> JSONResponse:
    body = SubscriptionVerificationErrorResponse(details=details)
    return JSONResponse(
        status_code=500,
        content=body.model_dump(),
        headers=settings.cors_headers,
    )


@router.api_route("/verify-subscription", methods=CALLBACK_METHODS, response_model=None)
async def verify_subscription(
    request: Request,
    tx_ref: Optional[str] = Query(None),
    status_hint: Optional[str] = Query(None, alias="status"),
    transaction_id: Optional[str] = Query(None),
    service: SubscriptionActivationService = Depends(get_activation_service),
) -> Response:
    """Verify a gateway payment and activate the matching subscription.

    Query parameters are the ones the gateway appends to its redirect:
    ``tx_ref``, ``status`` and ``transaction_id``.
    """
    cors_headers = settings.cors_headers

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers)

    if request.method != "GET":
        return _method_not_allowed()

    try:
        result = await service.activate(
            tx_ref=tx_ref,
            transaction_id=transaction_id,
            status_hint=status_hint,
        )
    except SubscriptionVerificationError as e:
        return _failure_response(e.detail)
    except Exception as e:
        log_error(logger, "Unexpected error during subscription verification", e)
        return _failure_response(str(e))

    body = SubscriptionVerificationResponse(
        subscription_id=result.subscription_id,
        user_id=result.user_id,
        plan_type=result.plan_type,
        is_trial=result.is_trial,
    )
    return JSONResponse(
        status_code=200,
        content=body.model_dump(mode="json"),
        headers=cors_headers,
    )


async def method_not_allowed_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Answer methods the router never registered like the callback does.

    Other HTTP errors keep FastAPI's default handling.
    """
    if exc.status_code == 405:
        return _method_not_allowed()
    return await http_exception_handler(request, exc)
