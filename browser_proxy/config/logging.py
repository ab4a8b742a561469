"""Application logging configuration values."""

import os


_RAW_LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
# Accepts the short "warn" spelling used by older deployments
APP_LOG_LEVEL = {"WARN": "WARNING"}.get(_RAW_LOG_LEVEL, _RAW_LOG_LEVEL)
APP_LOG_FORMAT = os.getenv(
    "APP_LOG_FORMAT",
    "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] [%(channel)s %(client)s] %(message)s",
)
APP_LOG_DATEFMT = os.getenv("APP_LOG_DATEFMT", "%Y-%m-%dT%H:%M:%S")


__all__ = [
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
