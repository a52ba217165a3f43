"""Create all tables on the configured database.

Usage:
    cd backend
    python -m scripts.init_db
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from paylockr.core.config import settings
from paylockr.core.database import engine, init_tables
from paylockr.core.logging import setup_logging


async def main() -> None:
    print("=" * 50)
    print("Initializing PayLockr database")
    print("=" * 50)
    print(f"  Database: {engine.url.render_as_string(hide_password=True)}")

    try:
        await init_tables()
    finally:
        await engine.dispose()

    print("✓ Tables created")


if __name__ == "__main__":
    setup_logging(level=settings.LOG_LEVEL, json_format=False)
    asyncio.run(main())
