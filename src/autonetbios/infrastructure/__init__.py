"""
Infrastructure layer - WinRM transport, registry/event log access,
directory lookups, configuration and logging.
"""
