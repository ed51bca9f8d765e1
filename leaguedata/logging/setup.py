import re
import sys
import logging
from typing import Any

from loguru import logger

from leaguedata.config.settings import settings

# Published Google Sheets expose the sheet through an opaque key in the URL path.
PUBLISHED_SHEET_KEY = re.compile(r"(/spreadsheets/d/e/)([A-Za-z0-9_-]+)(/pub)")


def mask_sheet_keys(text: str) -> str:
    """Replaces the key segment of published-sheet URLs with a masked form."""

    def _mask(match: re.Match) -> str:
        key = match.group(2)
        masked = key[:4] + "****" + key[-4:] if len(key) > 8 else "********"
        return f"{match.group(1)}{masked}{match.group(3)}"

    return PUBLISHED_SHEET_KEY.sub(_mask, text)


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask sheet keys in log records."""

    def mask_value(value: Any) -> Any:
        if isinstance(value, str):
            return mask_sheet_keys(value)
        elif isinstance(value, dict):
            return {k: mask_value(v) for k, v in value.items()}
        elif isinstance(value, (list, tuple)):
            return [mask_value(item) for item in value]
        return value

    record["message"] = mask_sheet_keys(record["message"])

    if "extra" in record and isinstance(record["extra"], dict):
        for key, value in list(record["extra"].items()):
            record["extra"][key] = mask_value(value)

    return True  # Keep the record after masking


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,  # locals may hold sheet URLs
        filter=sensitive_data_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx logs every request through it)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info("Standard logging intercepted.")
