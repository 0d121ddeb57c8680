"""Configuration infrastructure."""

from .repository import ConfigRepository

__all__ = ["ConfigRepository"]
