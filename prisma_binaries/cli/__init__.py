"""
prisma-binaries CLI module.

This module provides the command-line interface for prisma-binaries.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
