"""Directory service access for host discovery."""

from .ad_directory import ActiveDirectoryClient, DirectoryService

__all__ = ["ActiveDirectoryClient", "DirectoryService"]
