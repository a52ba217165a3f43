"""Gateway construction from application settings."""

from typing import Type

from paylockr.core.config import Settings, settings
from paylockr.modules.payment_gateway.gateways import FlutterwaveGateway
from paylockr.modules.payment_gateway.interface import (
    GatewayProvider,
    PaymentGatewayInterface,
)


class PaymentGatewayFactory:
    """Factory for creating payment gateway instances."""

    _gateways: dict[str, Type[PaymentGatewayInterface]] = {
        GatewayProvider.FLUTTERWAVE.value: FlutterwaveGateway,
    }

    @classmethod
    def create(
        cls,
        provider: str,
        config: Settings,
    ) -> PaymentGatewayInterface:
        """Create a gateway client with credentials read from ``config``.

        Raises:
            ValueError: If the provider is not supported
        """
        gateway_class = cls._gateways.get(provider)
        if not gateway_class:
            raise ValueError(f"Unsupported gateway provider: {provider}")

        return gateway_class(
            secret_key=config.FLUTTERWAVE_SECRET_KEY,
            base_url=config.FLUTTERWAVE_BASE_URL,
            timeout=config.GATEWAY_TIMEOUT_SECONDS,
        )

    @classmethod
    def get_supported_providers(cls) -> list[str]:
        return list(cls._gateways.keys())


def get_payment_gateway() -> PaymentGatewayInterface:
    """FastAPI dependency: a gateway client built per request."""
    return PaymentGatewayFactory.create(GatewayProvider.FLUTTERWAVE.value, settings)
