"""Application configuration."""

from figurevault.config.settings import Settings

__all__ = ["Settings"]
