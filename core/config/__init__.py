#!/usr/bin/env python3
"""Configuration for the commerce core

Sub-configs:
- app_config: AppConfig combining everything below
- infra_config: PostgreSQL connection and pool settings
- service_config: catalogue service, shipping carrier, stock ledger settings
- logging_config: logger level, format and handlers

Values come from the process environment, optionally seeded from
deployment/environments/<env>.env (existing variables win).
"""
import os
from dotenv import load_dotenv
from .app_config import AppConfig
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .service_config import CarrierConfig, InventoryConfig, ServiceConfig

ENV_FILES = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}


def load_environment() -> str:
    """Load the .env file for the current ENV; returns the environment name"""
    env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
    load_dotenv(ENV_FILES.get(env, ENV_FILES["development"]), override=False)
    return env


load_environment()
settings = AppConfig.from_env()


def get_settings() -> AppConfig:
    """Get global settings instance"""
    return settings


def reload_settings() -> AppConfig:
    """Re-read the environment (and its .env file) into a new settings instance"""
    global settings
    load_environment()
    settings = AppConfig.from_env()
    return settings


__all__ = [
    'AppConfig',
    'get_settings',
    'reload_settings',
    'load_environment',
    'settings',
    'LoggingConfig',
    'InfraConfig',
    'ServiceConfig',
    'CarrierConfig',
    'InventoryConfig',
]
