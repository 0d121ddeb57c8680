"""
AutoNetbios - fleet enforcement of NetBIOS-over-TCP/IP disablement.

Resolves Windows hosts (explicitly or from Active Directory), forces
``NetbiosOptions = 2`` on every NetBT interface over PowerShell remoting,
and writes one System event per changed interface.

Usage:
    # CLI
    autonetbios enforce --host WS01 --host WS02

    # Programmatic
    from autonetbios.application import EnforcementService

    report = EnforcementService().enforce(["WS01", "WS02"])
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
