"""
Pinned versions and remote locations of the Prisma binaries.

The engine versions can be found under
https://github.com/prisma/prisma-engine/commits/master.
"""

# Hardcoded version of the Prisma CLI.
PRISMA_VERSION = "2.0.0-alpha.443"

# Hardcoded commit of the Prisma engines.
ENGINE_VERSION = "2eb5a63ad82e15dc2c248a0ac84dc28cd35542d6"

# Package name of the CLI in the remote store.
CLI_PACKAGE = "prisma-cli"

# S3 bucket holding the CLI binaries: (package, version, platform).
PRISMA_URL = "https://prisma-photongo.s3-eu-west-1.amazonaws.com/%s-%s-%s.gz"

# S3 bucket holding the engine binaries: (engine version, binary name, artifact).
ENGINE_URL = "https://prisma-builds.s3-eu-west-1.amazonaws.com/master/%s/%s/%s.gz"

# Engines required by the generator, fetched in this order.
ENGINES = (
    "query-engine",
    "migration-engine",
    "introspection-engine",
)

__all__ = [
    "PRISMA_VERSION",
    "ENGINE_VERSION",
    "CLI_PACKAGE",
    "PRISMA_URL",
    "ENGINE_URL",
    "ENGINES",
]
