"""Auth module: user accounts and provisioning."""

from paylockr.modules.auth.models import User, hash_password, verify_password
from paylockr.modules.auth.repository import UserRepository
from paylockr.modules.auth.service import (
    AccountProvisioningError,
    AccountProvisioningService,
    UserExistsError,
)

__all__ = [
    "User",
    "hash_password",
    "verify_password",
    "UserRepository",
    "AccountProvisioningError",
    "AccountProvisioningService",
    "UserExistsError",
]
