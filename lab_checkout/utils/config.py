"""
Configuration management with environment variables.

This module provides centralized configuration for the checkout
service: logging, report output and overrides for policy limits.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from ..models.policy import CheckoutPolicy, DEFAULT_POLICY


def _env_int(name: str, default: int) -> int:
    """
    Read an integer environment variable.

    Raises:
        ValueError: If the variable is set but not an integer
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw!r}")


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables (and a .env file if
    present) and provides validated access to configuration values.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        output_dir: Directory for batch reports
        mask_identifiers: Whether to mask requester identifiers in logs
        policy: Checkout policy with environment overrides applied

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(config.policy.max_duration_hours)
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        # Logging
        self._log_level = os.getenv("LAB_CHECKOUT_LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LAB_CHECKOUT_LOG_FILE") or None
        self._mask_identifiers = (
            os.getenv("LAB_CHECKOUT_MASK_IDENTIFIERS", "false").lower() == "true"
        )

        # Output settings
        self._output_dir = Path(os.getenv("LAB_CHECKOUT_OUTPUT_DIR", "output"))

        # Policy overrides
        self._max_duration_hours = _env_int(
            "LAB_CHECKOUT_MAX_DURATION_HOURS", DEFAULT_POLICY.max_duration_hours
        )
        self._max_borrow_count = _env_int(
            "LAB_CHECKOUT_MAX_BORROW_COUNT", DEFAULT_POLICY.max_borrow_count
        )
        self._restricted_max_hours = _env_int(
            "LAB_CHECKOUT_RESTRICTED_HOURS", DEFAULT_POLICY.restricted_max_hours
        )
        self._clearance_prefix = os.getenv(
            "LAB_CHECKOUT_CLEARANCE_PREFIX", DEFAULT_POLICY.clearance_prefix
        )

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path, if file logging is enabled."""
        return self._log_file

    @property
    def mask_identifiers(self) -> bool:
        return self._mask_identifiers

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def policy(self) -> CheckoutPolicy:
        """
        Build the checkout policy.

        Returns:
            CheckoutPolicy with environment overrides applied on top of
            the defaults
        """
        return CheckoutPolicy(
            max_duration_hours=self._max_duration_hours,
            max_borrow_count=self._max_borrow_count,
            restricted_max_hours=self._restricted_max_hours,
            clearance_prefix=self._clearance_prefix
        )

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if self._max_duration_hours < DEFAULT_POLICY.min_duration_hours:
            errors.append(
                "LAB_CHECKOUT_MAX_DURATION_HOURS must be at least "
                f"{DEFAULT_POLICY.min_duration_hours}"
            )

        if self._max_borrow_count <= 0:
            errors.append("LAB_CHECKOUT_MAX_BORROW_COUNT must be positive")

        if self._restricted_max_hours <= 0:
            errors.append("LAB_CHECKOUT_RESTRICTED_HOURS must be positive")

        if not self._clearance_prefix or not self._clearance_prefix.strip():
            errors.append("LAB_CHECKOUT_CLEARANCE_PREFIX must not be empty")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LAB_CHECKOUT_LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True


# Singleton instance
config = Config()
