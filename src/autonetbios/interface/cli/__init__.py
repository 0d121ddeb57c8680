"""
CLI package for AutoNetbios.
"""

from .cli import main

__all__ = ["main"]
