"""
Service Logger Setup

Configures the standard library logger for a service from LoggingConfig.

Usage:
    from core.logger import setup_service_logger

    logger = setup_service_logger("inventory_service")
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig, get_settings

_configured_services = set()


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service.

    Handlers are attached once per service name; later calls return the
    same logger without duplicating output.

    Args:
        service_name: Logger name, usually the service package name
        config: Logging configuration (defaults to global settings)

    Returns:
        Configured logger
    """
    config = config or get_settings().logging
    logger = logging.getLogger(service_name)

    logger.setLevel(config.level)

    if service_name in _configured_services:
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    _configured_services.add(service_name)

    logger.debug(f"Logger configured for {service_name} ({config.environment}, level={config.log_level})")
    return logger
