"""Pydantic schemas for the subscription verification callback."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field

ACTIVATION_SUCCESS_MESSAGE = "Subscription verified and activated successfully"
VERIFICATION_FAILED_LABEL = "Subscription verification failed"


class SubscriptionVerificationResponse(BaseModel):
    """Body returned after a subscription has been activated."""
    success: bool = True
    subscription_id: uuid.UUID
    user_id: uuid.UUID
    plan_type: Optional[str] = None
    is_trial: bool = False
    message: str = ACTIVATION_SUCCESS_MESSAGE


class SubscriptionVerificationErrorResponse(BaseModel):
    """Body returned for any fatal activation failure."""
    error: str = VERIFICATION_FAILED_LABEL
    details: str = Field(..., description="Underlying failure detail")
