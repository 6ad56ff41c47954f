"""
Dependency Injection Container.

This module provides a small DI container used to wire the checkout
service with its registry, validator and notifier.
"""

import logging
from typing import Dict, Type, Callable, Any


logger = logging.getLogger(__name__)


class DIContainer:
    """
    Simple dependency injection container.

    Supports:
    - Service registration with factory functions
    - Singleton pattern for shared instances
    - Service resolution with clear errors for missing services

    Examples:
        >>> container = DIContainer()
        >>> container.register(AssetRegistry, lambda: AssetRegistry(), singleton=True)
        >>> container.register(
        ...     CheckoutService,
        ...     lambda: CheckoutService(container.resolve(AssetRegistry))
        ... )
        >>> service = container.resolve(CheckoutService)
    """

    def __init__(self):
        """Initialize empty container."""
        self._services: Dict[Type, Callable] = {}
        self._singletons: Dict[Type, Any] = {}
        self._singleton_flags: Dict[Type, bool] = {}

        logger.debug("DI Container initialized")

    def register(
        self,
        interface: Type,
        implementation: Callable,
        singleton: bool = False
    ):
        """
        Register a service factory.

        Args:
            interface: Service interface or type
            implementation: Factory function that creates the service
            singleton: Whether to create a single shared instance
        """
        self._services[interface] = implementation
        self._singleton_flags[interface] = singleton
        self._singletons.pop(interface, None)

        logger.debug(
            f"Registered service: {interface.__name__} "
            f"(singleton={singleton})"
        )

    def register_instance(self, interface: Type, instance: Any):
        """
        Register an already-built instance as a singleton.

        Args:
            interface: Service interface or type
            instance: Instance returned by every resolve()
        """
        self.register(interface, lambda: instance, singleton=True)
        self._singletons[interface] = instance

    def resolve(self, interface: Type) -> Any:
        """
        Resolve a service from the container.

        Args:
            interface: Service interface or type to resolve

        Returns:
            Service instance

        Raises:
            ValueError: If service is not registered
        """
        if interface not in self._services:
            raise ValueError(
                f"Service not registered: {interface.__name__}. "
                f"Available services: {', '.join(self.get_registered_services())}"
            )

        if self._singleton_flags.get(interface, False):
            if self._singletons.get(interface) is None:
                logger.debug(f"Creating singleton instance: {interface.__name__}")
                self._singletons[interface] = self._services[interface]()
            return self._singletons[interface]

        logger.debug(f"Creating transient instance: {interface.__name__}")
        return self._services[interface]()

    def get_registered_services(self) -> list:
        """Get names of all registered service types."""
        return [service.__name__ for service in self._services.keys()]


def configure_default_services(container: DIContainer, app_config=None):
    """
    Register the checkout services.

    Config, Logger, AssetRegistry, CheckoutPolicy, Notifier and
    CheckoutRequestValidator are singletons; CheckoutService is built
    from them on each resolve.

    Args:
        container: DI container to configure
        app_config: Config to use (defaults to the module singleton)

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container)
        >>> service = container.resolve(CheckoutService)
    """
    from ..models.policy import CheckoutPolicy
    from ..notification.notifier import LoggingNotifier, Notifier
    from ..registry.asset_registry import AssetRegistry
    from ..services.checkout_service import CheckoutService
    from ..validation.request_validator import CheckoutRequestValidator
    from .config import Config, config
    from .logger import setup_logger

    app_config = app_config or config

    container.register(Config, lambda: app_config, singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            "lab_checkout",
            level=getattr(logging, app_config.log_level, logging.INFO),
            log_file=app_config.log_file,
            mask_identifiers=app_config.mask_identifiers
        ),
        singleton=True
    )

    container.register(CheckoutPolicy, lambda: app_config.policy, singleton=True)

    container.register(
        AssetRegistry,
        lambda: AssetRegistry(container.resolve(CheckoutPolicy)),
        singleton=True
    )

    container.register(
        Notifier,
        lambda: LoggingNotifier(
            container.resolve(logging.Logger).getChild("audit")
        ),
        singleton=True
    )

    container.register(
        CheckoutRequestValidator,
        lambda: CheckoutRequestValidator(container.resolve(CheckoutPolicy)),
        singleton=True
    )

    container.register(
        CheckoutService,
        lambda: CheckoutService(
            registry=container.resolve(AssetRegistry),
            validator=container.resolve(CheckoutRequestValidator),
            notifier=container.resolve(Notifier),
            policy=container.resolve(CheckoutPolicy)
        )
    )

    logger.info("Checkout services configured")
