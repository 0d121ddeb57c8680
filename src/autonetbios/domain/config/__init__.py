"""
Configuration domain package.

Pydantic models for enforcement settings and credentials.
"""

from .credential import Credential
from .settings import EnforcementSettings, WinRMSettings

__all__ = ["Credential", "EnforcementSettings", "WinRMSettings"]
