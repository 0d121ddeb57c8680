"""
Configuration repository for loading enforcement settings.

Reads ``enforcement_config.json`` into EnforcementSettings and fills in
WinRM credentials from the environment when the file has none.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from autonetbios.domain.config import Credential, EnforcementSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("config") / "enforcement_config.json"
USERNAME_ENV = "AUTONETBIOS_USERNAME"
PASSWORD_ENV = "AUTONETBIOS_PASSWORD"


class ConfigRepository:
    """
    Repository for configuration file operations.

    A missing file yields default settings; an unreadable or invalid file
    raises ValueError.
    """

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize the config repository.

        Args:
            config_file: Path to the JSON settings file.
                         Defaults to config/enforcement_config.json under the cwd.
        """
        self.config_file = Path(config_file) if config_file else Path.cwd() / DEFAULT_CONFIG_FILE

    def load_json_file(self) -> Dict[str, Any]:
        """
        Load the settings file.

        Returns:
            Parsed JSON data, or an empty dict when the file does not exist

        Raises:
            ValueError: If the file cannot be parsed
        """
        if not self.config_file.exists():
            logger.info("No config file at %s - using defaults", self.config_file)
            return {}
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.config_file}: {e}") from e
        except OSError as e:
            raise ValueError(f"Cannot read {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{self.config_file} must contain a JSON object")
        return data

    def load_settings(self, overrides: Optional[Dict[str, Any]] = None) -> EnforcementSettings:
        """
        Load EnforcementSettings, applying CLI overrides on top of the file.

        Args:
            overrides: Field values that take precedence over the file (None values ignored)

        Raises:
            ValueError: If the file or the merged settings are invalid
        """
        data = self.load_json_file()
        for key, value in (overrides or {}).items():
            if value is not None:
                data[key] = value

        try:
            settings = EnforcementSettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings in {self.config_file}: {e}") from e

        if settings.credentials is None:
            credential = self.credential_from_env()
            if credential is not None:
                settings = settings.model_copy(update={"credentials": credential})

        logger.debug(
            "Settings loaded: concurrency=%d, transport=%s/%s, dry_run=%s",
            settings.max_concurrency,
            settings.winrm.transport,
            settings.winrm.auth,
            settings.dry_run,
        )
        return settings

    @staticmethod
    def credential_from_env() -> Optional[Credential]:
        """Build a Credential from AUTONETBIOS_USERNAME / AUTONETBIOS_PASSWORD."""
        username = os.environ.get(USERNAME_ENV)
        password = os.environ.get(PASSWORD_ENV)
        if not username or password is None:
            return None
        logger.debug("Using WinRM credentials from environment for %s", username)
        return Credential(username=username, password=password)
