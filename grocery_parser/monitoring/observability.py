"""
Logging and logfire setup for the service process.
"""

import logging
from typing import Optional

import logfire

from ..config.settings import Settings

logger = logging.getLogger(__name__)


def configure_observability(settings: Optional[Settings] = None) -> bool:
    """
    Configure stdlib logging and logfire.

    logfire only ships data when a token is present, so local runs and tests
    stay offline. Returns True when logfire was configured.
    """
    level_name = (settings.log_level if settings else "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        logfire.configure(
            send_to_logfire="if-token-present",
            token=settings.logfire_token if settings else None,
            service_name="grocery-parser",
            console=False
        )
    except Exception as e:
        logger.warning(f"Logfire setup skipped: {e}")
        return False
    return True
