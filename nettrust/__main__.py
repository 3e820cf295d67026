"""
NetTrust Module Entry Point
============================

Allows running the NetTrust CLI via: python -m nettrust
"""

from nettrust.cli import main

if __name__ == "__main__":
    main()
