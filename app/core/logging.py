import sys
from typing import TYPE_CHECKING, Optional

from loguru import logger

from app.core.config import settings

if TYPE_CHECKING:
    from loguru import Logger

# Records outside a browsing session carry "-" as their session id
logger.configure(extra={"session": "-"})


def setup_logging(level: Optional[str] = None) -> "Logger":
    """Configure structured logging with loguru."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[session]}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level or settings.log_level,
    )
    return logger


def session_logger(session_id: str) -> "Logger":
    """Logger whose records are tagged with a browsing session id."""
    return logger.bind(session=session_id)
