"""
Reminder Entry Point

Use: python -m review_reminder
"""

import asyncio
import sys

from review_reminder.config import get_settings
from review_reminder.logging_config import get_logger, setup_logging
from review_reminder.processor import ReminderProcessor

logger = get_logger(__name__)


def main() -> int:
    """Run one reminder and return the process exit code."""
    try:
        settings = get_settings()
    except Exception as e:
        logger.error("Invalid configuration", error=str(e))
        return 1
    
    setup_logging(settings)
    
    try:
        asyncio.run(ReminderProcessor(settings).run())
    except Exception as e:
        logger.error(
            "Reminder run failed",
            error=str(e),
            error_type=type(e).__name__
        )
        return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
