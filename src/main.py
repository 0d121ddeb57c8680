"""
AutoNetbios - NetBIOS over TCP/IP enforcement for Windows fleets.
"""

import sys

from autonetbios.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())
