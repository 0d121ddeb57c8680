"""
Shared command helpers - settings loading and error display.
"""

from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer
from rich.console import Console

from autonetbios.domain.config import EnforcementSettings
from autonetbios.infrastructure.config.repository import ConfigRepository

console = Console(stderr=True)

EXIT_ERROR = 1
EXIT_HOST_FAILURES = 2


def load_settings(config_file: Optional[Path], overrides: Optional[Dict[str, Any]] = None) -> EnforcementSettings:
    """Load settings or exit with a readable error."""
    try:
        return ConfigRepository(config_file).load_settings(overrides)
    except ValueError as e:
        fail(f"Configuration error: {e}")


def fail(message: str, code: int = EXIT_ERROR) -> NoReturn:
    """Print an error and exit."""
    console.print(f"[red]❌ {message}[/red]")
    raise typer.Exit(code=code)
