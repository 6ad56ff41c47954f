"""
Notification sinks for checkout audit messages.

Notifiers receive informational notices and failure summaries. They
return nothing and have no say in whether a checkout succeeds.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple


class Notifier(ABC):
    """
    Abstract interface for audit notifications.

    Implementations may write to a log, collect messages in memory, or
    forward them elsewhere.
    """

    @abstractmethod
    def record(self, message: str):
        """
        Record an informational message.

        Args:
            message: Plain text notice
        """
        pass

    @abstractmethod
    def record_failure(self, category: str, message: str):
        """
        Record a failed checkout.

        Args:
            category: Reporting category (e.g. "policy-violation")
            message: Failure reason
        """
        pass


class LoggingNotifier(Notifier):
    """
    Notifier that writes to a logger.

    Examples:
        >>> notifier = LoggingNotifier(setup_logger("lab_checkout.audit"))
        >>> notifier.record("Processing completed for UID=KRG11771, AssetID=LAB-101")
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("lab_checkout.audit")

    def record(self, message: str):
        self.logger.info(f"[LOG ENTRY] {message}")

    def record_failure(self, category: str, message: str):
        self.logger.warning(f"[EXCEPTION] {category}: {message}")


class MemoryNotifier(Notifier):
    """
    Notifier that keeps everything it receives.

    Attributes:
        messages: Informational messages in arrival order
        failures: (category, message) pairs in arrival order
    """

    def __init__(self):
        self.messages: List[str] = []
        self.failures: List[Tuple[str, str]] = []

    def record(self, message: str):
        self.messages.append(message)

    def record_failure(self, category: str, message: str):
        self.failures.append((category, message))


class CompositeNotifier(Notifier):
    """Notifier that forwards every call to several notifiers in order."""

    def __init__(self, notifiers: List[Notifier]):
        self.notifiers = list(notifiers)

    def record(self, message: str):
        for notifier in self.notifiers:
            notifier.record(message)

    def record_failure(self, category: str, message: str):
        for notifier in self.notifiers:
            notifier.record_failure(category, message)
