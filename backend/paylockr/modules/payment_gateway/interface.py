"""Payment Gateway Interface - Abstract base class for gateway implementations.

Defines the contract gateway clients follow and the verification result
handed to the subscription activation flow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class GatewayProvider(str, Enum):
    """Supported payment gateway providers."""
    FLUTTERWAVE = "flutterwave"


@dataclass
class PaymentVerification:
    """Result from payment verification.

    ``status`` is the gateway's overall response status and
    ``transaction_status`` the status of the specific payment.
    """
    payment_id: Optional[str]
    status: str
    transaction_status: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    payment_method: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    meta: dict[str, Any] = field(default_factory=dict)
    gateway_response: Optional[dict] = None
    error_message: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        """Both the response and the payment itself report success."""
        return self.status == "success" and self.transaction_status == "successful"

    @property
    def plan_type(self) -> Optional[str]:
        return self.meta.get("plan_type") or None

    @property
    def is_trial(self) -> bool:
        # Only a real boolean true counts; "true" strings do not start a trial
        return self.meta.get("is_trial") is True

    @property
    def pending_user_data(self) -> Optional[dict]:
        return self.meta.get("pending_user_data") or None


class PaymentGatewayInterface(ABC):
    """Abstract interface for payment gateway implementations."""

    provider: GatewayProvider

    def __init__(self, secret_key: str):
        """Initialize gateway with its server-held secret.

        Args:
            secret_key: Gateway secret used for bearer authentication
        """
        self.secret_key = secret_key

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)

    @abstractmethod
    async def verify_payment(self, payment_id: str) -> PaymentVerification:
        """Verify a payment with the gateway.

        Implementations report transport and decoding failures through the
        returned verification instead of raising.

        Args:
            payment_id: Gateway transaction ID

        Returns:
            PaymentVerification with the gateway's view of the payment
        """
        pass
