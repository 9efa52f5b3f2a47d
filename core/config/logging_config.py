#!/usr/bin/env python3
"""Logging configuration for the commerce services"""
import logging
import os
from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoggingConfig:
    """Level, format and handler targets for service loggers"""
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: str = ""
    enable_console: bool = True

    # Service identity for logging
    service_name: str = "commerce"
    environment: str = "development"

    @property
    def level(self) -> int:
        """Numeric level; unknown names fall back to INFO"""
        value = getattr(logging, self.log_level.upper(), None)
        return value if isinstance(value, int) else logging.INFO

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() != "false",
            service_name=os.getenv("SERVICE_NAME", "commerce"),
            environment=env,
        )
