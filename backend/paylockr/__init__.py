"""PayLockr Subscription Activation Backend.

Finalizes subscription purchases after a payment gateway redirect: verifies
the payment, activates the pending subscription, provisions the user account
and records the transaction and notification.

Modules:
    - core: Configuration, database, logging and middleware setup
    - modules.auth: User account provisioning
    - modules.billing: Subscriptions, profiles, transactions and fee rates
    - modules.notification: In-app user notifications
    - modules.payment_gateway: Gateway verification (Flutterwave)
    - modules.subscription: Subscription activation callback
"""

__version__ = "0.1.0"
