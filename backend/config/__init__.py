"""Configuration module for the Chat0 backend."""

from backend.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
