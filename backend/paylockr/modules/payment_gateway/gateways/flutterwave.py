"""Flutterwave payment gateway implementation."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from paylockr.modules.payment_gateway.interface import (
    GatewayProvider,
    PaymentGatewayInterface,
    PaymentVerification,
)

logger = logging.getLogger(__name__)


class FlutterwaveGateway(PaymentGatewayInterface):
    """Flutterwave v3 client for verifying redirect payments."""

    provider = GatewayProvider.FLUTTERWAVE

    BASE_URL = "https://api.flutterwave.com/v3"

    def __init__(
        self,
        secret_key: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(secret_key)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    async def _make_request(self, method: str, endpoint: str) -> dict:
        """Make an authenticated request to the Flutterwave API.

        Error responses still carry a JSON body (``{"status": "error", ...}``),
        so the body is decoded whatever the HTTP status.

        Raises:
            httpx.HTTPError: On transport failure
            ValueError: If the body is not a JSON object
        """
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.request(
                method=method,
                url=f"{self.base_url}{endpoint}",
                headers=self._get_headers(),
            )
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"Unexpected Flutterwave response: {body!r}")
        return body

    async def verify_payment(self, payment_id: str) -> PaymentVerification:
        """Verify a Flutterwave transaction by its ID.

        Args:
            payment_id: Flutterwave transaction ID (``transaction_id`` callback param)

        Returns:
            PaymentVerification with payment and customer details
        """
        try:
            response = await self._make_request(
                "GET", f"/transactions/{quote(str(payment_id), safe='')}/verify"
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error(f"Flutterwave verify_payment error: {e}")
            return PaymentVerification(
                payment_id=payment_id,
                status="error",
                gateway_response={"error": str(e)},
                error_message=str(e),
            )

        return self._parse_verification(payment_id, response)

    def _parse_verification(self, payment_id: str, response: dict) -> PaymentVerification:
        data = response.get("data")
        if not isinstance(data, dict):
            return PaymentVerification(
                payment_id=payment_id,
                status=str(response.get("status", "error")),
                gateway_response=response,
                error_message=response.get("message"),
            )

        customer: dict[str, Any] = data.get("customer") or {}
        meta = data.get("meta")

        return PaymentVerification(
            payment_id=str(data["id"]) if data.get("id") is not None else None,
            status=str(response.get("status", "")),
            transaction_status=data.get("status"),
            amount=data.get("amount"),
            currency=data.get("currency"),
            payment_method=data.get("payment_type"),
            customer_email=customer.get("email"),
            customer_name=customer.get("name"),
            meta=meta if isinstance(meta, dict) else {},
            gateway_response=response,
            error_message=response.get("message") if response.get("status") != "success" else None,
        )
