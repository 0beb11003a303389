"""
Entry point for running prisma-binaries as a module.

Usage: python -m prisma_binaries [command] [options]
"""

from prisma_binaries.cli.parser import main

if __name__ == "__main__":
    main()
