"""Payment Gateway Module.

Verifies redirect payments with the gateway (Flutterwave).
"""

from paylockr.modules.payment_gateway.interface import (
    GatewayProvider,
    PaymentGatewayInterface,
    PaymentVerification,
)
from paylockr.modules.payment_gateway.gateways import FlutterwaveGateway
from paylockr.modules.payment_gateway.service import (
    PaymentGatewayFactory,
    get_payment_gateway,
)

__all__ = [
    "GatewayProvider",
    "PaymentGatewayInterface",
    "PaymentVerification",
    "FlutterwaveGateway",
    "PaymentGatewayFactory",
    "get_payment_gateway",
]
