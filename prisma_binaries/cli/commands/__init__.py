"""Command implementations for the prisma-binaries CLI."""
