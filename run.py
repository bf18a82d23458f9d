"""
Reminder Runner

This script is the entry point for running the reminder from a checkout.
Use: python run.py
"""

import sys
from pathlib import Path

# Add project root to Python path to enable 'review_reminder' imports
project_root = Path(__file__).parent.absolute()
sys.path.insert(0, str(project_root))

from review_reminder.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
