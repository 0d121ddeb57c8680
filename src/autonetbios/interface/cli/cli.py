"""
CLI main entry point.
"""


def main() -> int:
    """
    Main entry point for the AutoNetbios CLI.

    Returns:
        int: Exit code (0 success, 1 error, 2 one or more hosts failed)
    """
    from .app import app  # pylint: disable=import-outside-toplevel

    try:
        app()
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    return 0
