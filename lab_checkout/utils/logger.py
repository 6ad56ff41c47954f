"""
Logging utilities.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Optional masking of requester identifiers
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# Requester identifiers: 3 letters followed by digits, 8-12 characters
IDENTIFIER_PATTERN = re.compile(r'\b([A-Z]{3})([0-9]{5,9})\b')


def mask_identifier(identifier: str) -> str:
    """
    Mask a requester identifier for safe logging.

    Args:
        identifier: Identifier to mask

    Returns:
        Identifier with everything after the first three characters hidden

    Examples:
        >>> mask_identifier("ABC15456")
        'ABC*****'
        >>> mask_identifier("AB")
        '***'
    """
    if not identifier or len(identifier) <= 3:
        return "***"
    return identifier[:3] + "*" * (len(identifier) - 3)


class IdentifierMaskFilter(logging.Filter):
    """
    Logging filter that masks requester identifiers.

    The three-letter prefix is kept, since it decides clearance and is
    useful when reading audit lines.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask identifiers in the log record.

        Args:
            record: Log record to filter

        Returns:
            Always True (allows all records through after masking)
        """
        record.msg = IDENTIFIER_PATTERN.sub(
            lambda match: mask_identifier(match.group(0)),
            str(record.msg)
        )
        return True


def setup_logger(
    name: str = "lab_checkout",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    mask_identifiers: bool = False
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "lab_checkout")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output
        mask_identifiers: Whether to mask requester identifiers

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger()
        >>> logger.info("Checkout batch started")

        >>> logger = setup_logger(
        ...     name="lab_checkout.audit",
        ...     level=logging.DEBUG,
        ...     log_file="output/logs/checkout.log"
        ... )
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if mask_identifiers:
        mask_filter = IdentifierMaskFilter()
        for handler in logger.handlers:
            handler.addFilter(mask_filter)

    return logger
