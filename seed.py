"""Simple seeding script runner."""

import asyncio
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from scripts.seed_data import main

if __name__ == "__main__":
    if len(sys.argv) < 2 or sys.argv[1] not in ("up", "down"):
        print("Usage: python seed.py [up|down] [--teachers N]")
        print("  up   - Create seeding data")
        print("  down - Clear all data")
        sys.exit(1)

    sys.exit(asyncio.run(main()))
