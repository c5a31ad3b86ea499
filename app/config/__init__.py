"""Configuration package for the Tradelink communications service."""

from .base import BaseSettings
from .database import DatabaseConfig

__all__ = ["BaseSettings", "DatabaseConfig"]
