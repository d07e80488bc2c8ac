"""Entry: python main.py <command> ... (same as the skill-router console script)."""
import sys

from skill_router.cli import main

if __name__ == "__main__":
    sys.exit(main())
