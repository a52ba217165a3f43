"""Payment gateway implementations."""

from .flutterwave import FlutterwaveGateway

__all__ = ["FlutterwaveGateway"]
