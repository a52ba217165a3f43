"""Inspect a subscription and what its activation left behind.

Prints the subscription for a transaction reference, its transaction
records and the notifications of the attached user. Useful after a
callback reported a partial failure.

Usage:
    cd backend
    python -m scripts.check_subscription <tx_ref>

Example:
    python -m scripts.check_subscription PLK-1718000000-starter
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import NoResultFound

from paylockr.core.database import async_session_maker, engine
from paylockr.modules.billing.repository import (
    ProfileRepository,
    SubscriptionRepository,
    TransactionRepository,
)
from paylockr.modules.notification.repository import NotificationRepository


async def check_subscription(tx_ref: str) -> None:
    """Print the activation state for a transaction reference."""
    async with async_session_maker() as session:
        print(f"\n{'='*60}")
        print(f"Checking subscription for tx_ref: {tx_ref}")
        print(f"{'='*60}")

        try:
            sub = await SubscriptionRepository(session).get_by_tx_ref(tx_ref)
        except NoResultFound:
            print("\n✗ No subscription found for this reference")
            return

        print("\n✓ Subscription found:")
        print(f"  ID: {sub.id}")
        print(f"  Plan: {sub.plan_type}")
        print(f"  Status: {sub.status}")
        print(f"  User: {sub.user_id or '-'}")
        print(f"  Gateway transaction: {sub.gateway_subscription_id or '-'}")
        print(f"  Updated: {sub.updated_at}")

        print(f"\n{'='*60}")
        print("Transactions:")
        print(f"{'='*60}")
        transactions = await TransactionRepository(session).list_by_tx_ref(tx_ref)
        if transactions:
            for tx in transactions:
                print(f"\n  Transaction: {tx.id}")
                print(f"    Amount: {tx.amount} {tx.currency}")
                print(f"    Status: {tx.status}")
                print(f"    Fee rate: {tx.plan_fee_rate}")
                print(f"    Created: {tx.created_at}")
        else:
            print("  No transactions found")

        if sub.user_id is None:
            return

        profile = await ProfileRepository(session).get(sub.user_id)
        print(f"\n{'='*60}")
        print("Profile:")
        print(f"{'='*60}")
        if profile:
            print(f"  Plan: {profile.plan_type or '-'}")
            print(f"  Subscription status: {profile.subscription_status or '-'}")
        else:
            print("  No profile found")

        print(f"\n{'='*60}")
        print("Notifications:")
        print(f"{'='*60}")
        notifications = await NotificationRepository(session).list_for_user(sub.user_id)
        if notifications:
            for n in notifications:
                print(f"\n  [{n.type}] {n.title}")
                print(f"    {n.message}")
        else:
            print("  No notifications found")

        if sub.is_active() and len(transactions) > 1:
            print(f"\n⚠️  {len(transactions)} transaction records for one activation")


async def main(tx_ref: str) -> None:
    try:
        await check_subscription(tx_ref)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.check_subscription <tx_ref>")
        sys.exit(1)

    asyncio.run(main(sys.argv[1]))
