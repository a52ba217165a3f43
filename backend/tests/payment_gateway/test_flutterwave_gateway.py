"""Tests for the Flutterwave verification client.

HTTP traffic is served by ``httpx.MockTransport``; no request leaves the
process.
"""

import json

import httpx
import pytest

from paylockr.core.config import Settings
from paylockr.modules.payment_gateway.gateways import FlutterwaveGateway
from paylockr.modules.payment_gateway.service import PaymentGatewayFactory

SECRET = "FLWSECK_TEST-0123456789"

VERIFIED_BODY = {
    "status": "success",
    "message": "Transaction fetched successfully",
    "data": {
        "id": 4975363,
        "tx_ref": "PLK-1718000000-professional",
        "amount": 49,
        "currency": "USD",
        "status": "successful",
        "payment_type": "card",
        "customer": {"email": "ada@example.com", "name": "Ada Lovelace"},
        "meta": {
            "plan_type": "professional",
            "is_trial": True,
            "pending_user_data": {"password": "S3cure!pass"},
        },
    },
}


def gateway_for(handler) -> FlutterwaveGateway:
    return FlutterwaveGateway(secret_key=SECRET, transport=httpx.MockTransport(handler))


class TestVerifyPayment:
    """verify_payment against canned gateway responses."""

    @pytest.mark.asyncio
    async def test_calls_verify_endpoint_with_bearer_secret(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=VERIFIED_BODY)

        await gateway_for(handler).verify_payment("4975363")

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert str(request.url) == "https://api.flutterwave.com/v3/transactions/4975363/verify"
        assert request.headers["Authorization"] == f"Bearer {SECRET}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payment_id,expected_path",
        [
            ("999?x=", b"/v3/transactions/999%3Fx%3D/verify"),
            ("12\n34", b"/v3/transactions/12%0A34/verify"),
            ("../refunds/1", b"/v3/transactions/..%2Frefunds%2F1/verify"),
        ],
    )
    async def test_transaction_id_is_a_single_path_segment(
        self, payment_id: str, expected_path: bytes
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(404, json={"status": "error", "message": "not found", "data": None})

        result = await gateway_for(handler).verify_payment(payment_id)

        assert len(seen) == 1
        assert seen[0].url.raw_path == expected_path
        assert seen[0].url.query == b""
        assert not result.is_successful

    @pytest.mark.asyncio
    async def test_invalid_url_is_reported_not_raised(self) -> None:
        gateway = FlutterwaveGateway(
            secret_key=SECRET,
            base_url="https://api.flutterwave.com/v3\n",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=VERIFIED_BODY)),
        )

        result = await gateway.verify_payment("4975363")

        assert result.status == "error"
        assert not result.is_successful

    @pytest.mark.asyncio
    async def test_successful_payment_is_parsed(self) -> None:
        result = await gateway_for(
            lambda request: httpx.Response(200, json=VERIFIED_BODY)
        ).verify_payment("4975363")

        assert result.is_successful
        assert result.payment_id == "4975363"
        assert result.amount == 49
        assert result.currency == "USD"
        assert result.payment_method == "card"
        assert result.customer_email == "ada@example.com"
        assert result.customer_name == "Ada Lovelace"
        assert result.plan_type == "professional"
        assert result.is_trial is True
        assert result.pending_user_data == {"password": "S3cure!pass"}
        assert result.error_message is None

    @pytest.mark.asyncio
    async def test_failed_transaction_is_not_successful(self) -> None:
        body = json.loads(json.dumps(VERIFIED_BODY))
        body["data"]["status"] = "failed"

        result = await gateway_for(
            lambda request: httpx.Response(200, json=body)
        ).verify_payment("4975363")

        assert result.status == "success"
        assert result.transaction_status == "failed"
        assert not result.is_successful

    @pytest.mark.asyncio
    async def test_error_body_without_data(self) -> None:
        body = {"status": "error", "message": "No transaction was found for this id", "data": None}

        result = await gateway_for(
            lambda request: httpx.Response(400, json=body)
        ).verify_payment("999")

        assert not result.is_successful
        assert result.status == "error"
        assert result.error_message == "No transaction was found for this id"

    @pytest.mark.asyncio
    async def test_network_failure_is_reported_not_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await gateway_for(handler).verify_payment("4975363")

        assert result.status == "error"
        assert not result.is_successful
        assert "connection refused" in result.error_message

    @pytest.mark.asyncio
    async def test_non_json_body_is_reported_not_raised(self) -> None:
        result = await gateway_for(
            lambda request: httpx.Response(502, text="<html>Bad gateway</html>")
        ).verify_payment("4975363")

        assert result.status == "error"
        assert not result.is_successful

    @pytest.mark.asyncio
    async def test_non_object_json_is_reported_not_raised(self) -> None:
        result = await gateway_for(
            lambda request: httpx.Response(200, json=["unexpected"])
        ).verify_payment("4975363")

        assert result.status == "error"

    @pytest.mark.asyncio
    async def test_string_trial_flag_does_not_start_trial(self) -> None:
        body = json.loads(json.dumps(VERIFIED_BODY))
        body["data"]["meta"]["is_trial"] = "true"

        result = await gateway_for(
            lambda request: httpx.Response(200, json=body)
        ).verify_payment("4975363")

        assert result.is_trial is False

    @pytest.mark.asyncio
    async def test_missing_meta_yields_empty_meta(self) -> None:
        body = json.loads(json.dumps(VERIFIED_BODY))
        del body["data"]["meta"]

        result = await gateway_for(
            lambda request: httpx.Response(200, json=body)
        ).verify_payment("4975363")

        assert result.is_successful
        assert result.meta == {}
        assert result.plan_type is None
        assert result.pending_user_data is None


class TestGatewayFactory:
    """Gateway construction from settings."""

    def test_builds_flutterwave_from_settings(self) -> None:
        config = Settings(
            FLUTTERWAVE_SECRET_KEY=SECRET,
            FLUTTERWAVE_BASE_URL="https://sandbox.example.test/v3/",
            GATEWAY_TIMEOUT_SECONDS=5.0,
        )

        gateway = PaymentGatewayFactory.create("flutterwave", config)

        assert isinstance(gateway, FlutterwaveGateway)
        assert gateway.is_configured
        assert gateway.base_url == "https://sandbox.example.test/v3"
        assert gateway.timeout == 5.0

    def test_unconfigured_secret(self) -> None:
        gateway = PaymentGatewayFactory.create(
            "flutterwave", Settings(FLUTTERWAVE_SECRET_KEY="")
        )
        assert not gateway.is_configured

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported gateway provider"):
            PaymentGatewayFactory.create("paystack", Settings())

    def test_supported_providers(self) -> None:
        assert PaymentGatewayFactory.get_supported_providers() == ["flutterwave"]
